from app.model.base import BaseModel
from app.model.account import Account
from app.model.enrollment import Enrollment, EnrollmentStatus

__all__ = ["BaseModel", "Account", "Enrollment", "EnrollmentStatus"]
