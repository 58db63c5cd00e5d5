from sqlmodel import Field
from sqlalchemy import UniqueConstraint

from app.model.base import BaseModel


class Account(BaseModel, table=True):
    """Modelo Account - contas dos candidatos (tabela legada `usuarios`)."""

    __tablename__ = "usuarios"

    nome_completo: str = Field(max_length=255)
    # Sempre gravado em lowercase; unicidade case-insensitive depende disso.
    email: str = Field(max_length=255, index=True)
    # Digest bcrypt, nunca a senha em texto puro.
    senha: str = Field(max_length=255)

    __table_args__ = (
        UniqueConstraint("email", name="uq_usuarios_email"),
    )
