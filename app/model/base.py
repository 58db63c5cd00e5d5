from datetime import datetime, timezone
from typing import Optional

from sqlmodel import SQLModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """Modelo base com a chave primária comum às tabelas."""

    id: Optional[int] = Field(default=None, primary_key=True)
