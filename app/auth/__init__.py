from app.auth.password import hash_password, verify_password
from app.auth.dependencies import require_admin

__all__ = [
    "hash_password",
    "verify_password",
    "require_admin",
]
