from __future__ import annotations

import enum
import unicodedata
from datetime import datetime
from decimal import Decimal
from typing import Optional

import sqlalchemy as sa
from sqlmodel import Field
from sqlalchemy import UniqueConstraint

from app.model.base import BaseModel, utc_now


class EnrollmentStatus(str, enum.Enum):
    """Status de aprovação da inscrição (rótulos legados gravados no banco)."""

    PENDING = "PENDENTE"
    UNDER_REVIEW = "EM ANÁLISE"
    APPROVED = "APROVADO"
    REJECTED = "REJEITADO"

    @classmethod
    def parse(cls, label: str) -> "EnrollmentStatus":
        """
        Converte um rótulo livre para o status correspondente.

        Ignora caixa, espaços nas pontas e acentos ("em analise" -> EM ANÁLISE).

        Raises:
            ValueError: Se o rótulo não corresponder a nenhum status conhecido
        """
        wanted = _fold(label)
        for status in cls:
            if _fold(status.value) == wanted:
                return status
        raise ValueError(f"Status inválido: {label!r}")


# Status que ainda aguardam decisão do administrador (aparecem primeiro na listagem).
UNRESOLVED_STATUS_LABELS: tuple[str, ...] = (
    "",
    EnrollmentStatus.PENDING.value,
    EnrollmentStatus.UNDER_REVIEW.value,
)


def _fold(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value.strip().upper())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


class Enrollment(BaseModel, table=True):
    """Modelo Enrollment - inscrição socioeconômica de um candidato (tabela `inscricoes`)."""

    __tablename__ = "inscricoes"

    usuario_id: int = Field(foreign_key="usuarios.id", index=True, nullable=False)

    nome_completo: str = Field(max_length=255)
    cpf: str = Field(max_length=20)
    idade: Optional[int] = Field(default=None, nullable=True)
    genero: Optional[str] = Field(default=None, max_length=50, nullable=True)
    endereco: Optional[str] = Field(default=None, nullable=True)

    # Dados financeiros do domicílio
    renda_familiar: Optional[Decimal] = Field(default=None, sa_type=sa.Numeric(12, 2), nullable=True)
    numero_membros_familia: Optional[int] = Field(default=None, nullable=True)
    despesas_mensais: Optional[Decimal] = Field(default=None, sa_type=sa.Numeric(12, 2), nullable=True)
    nivel_escolaridade: Optional[str] = Field(default=None, max_length=100, nullable=True)

    # String livre no banco para continuar lendo rótulos legados; a escrita passa por EnrollmentStatus.
    status_aprovacao: Optional[str] = Field(default=None, max_length=50, nullable=True, index=True)
    data_inscricao: datetime = Field(
        default_factory=utc_now,
        sa_type=sa.DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        UniqueConstraint("cpf", name="uq_inscricoes_cpf"),
    )
