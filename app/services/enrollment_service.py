"""
Ciclo de vida da inscrição: envio, reenvio pelo candidato, edição e decisão do administrador.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel as PydanticBaseModel, Field, field_validator
from sqlalchemy.exc import DataError, IntegrityError
from sqlmodel import Session, select

from app.exceptions import DuplicateIdentifierError, InfrastructureError, NotFoundError, ValidationError
from app.model.enrollment import Enrollment, EnrollmentStatus

logger = logging.getLogger(__name__)

OPTIONAL_FIELDS = (
    "idade",
    "genero",
    "endereco",
    "renda_familiar",
    "numero_membros_familia",
    "despesas_mensais",
    "nivel_escolaridade",
)
MUTABLE_FIELDS = ("nome_completo", "cpf") + OPTIONAL_FIELDS

MAX_AGE = 150
MAX_HOUSEHOLD_MEMBERS = 100

UNIQUE_CPF_CONSTRAINT = "uq_inscricoes_cpf"
OWNER_FK_CONSTRAINT = "inscricoes_usuario_id_fkey"


def normalize_optional(value: Any) -> Any:
    """String vazia (ou só espaços) vira None; o resto passa intacto."""
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class EnrollmentFields(PydanticBaseModel):
    """Campos editáveis do formulário de inscrição."""

    # Limites iguais aos das colunas em app/model/enrollment.py
    nome_completo: str = Field(max_length=255)
    cpf: str = Field(max_length=20)
    idade: Optional[int] = Field(default=None, ge=0, le=MAX_AGE)
    genero: Optional[str] = Field(default=None, max_length=50)
    endereco: Optional[str] = None
    renda_familiar: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    numero_membros_familia: Optional[int] = Field(default=None, ge=0, le=MAX_HOUSEHOLD_MEMBERS)
    despesas_mensais: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    nivel_escolaridade: Optional[str] = Field(default=None, max_length=100)

    @field_validator("nome_completo", "cpf")
    @classmethod
    def validate_required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Campo obrigatório não pode estar vazio")
        return v.strip()

    # Roda antes da conversão de tipo: "" em campo numérico precisa virar None, não erro.
    @field_validator(*OPTIONAL_FIELDS, mode="before")
    @classmethod
    def empty_to_none(cls, v: Any) -> Any:
        return normalize_optional(v)


class EnrollmentCreate(EnrollmentFields):
    usuario_id: int


def serialize_enrollment(enrollment: Enrollment, **extra: Any) -> dict:
    data = enrollment.model_dump()
    data.update(extra)
    return data


def get_enrollment(session: Session, enrollment_id: int) -> Enrollment:
    enrollment = session.get(Enrollment, enrollment_id)
    if enrollment is None:
        raise NotFoundError("Inscrição não encontrada.")
    return enrollment


def _apply_fields(enrollment: Enrollment, fields: EnrollmentFields) -> None:
    for name in MUTABLE_FIELDS:
        setattr(enrollment, name, getattr(fields, name))


def _constraint_name(error: IntegrityError) -> str | None:
    """Nome da constraint violada (psycopg expõe em diag; SQLite não)."""
    diag = getattr(error.orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def _save(session: Session, enrollment: Enrollment) -> Enrollment:
    """
    Grava a inscrição traduzindo violações de constraint em erros de domínio.

    Raises:
        DuplicateIdentifierError: CPF já usado por outra inscrição
        ValidationError: usuario_id não corresponde a nenhuma conta, ou valor fora da coluna
        InfrastructureError: Qualquer outra violação de integridade
    """
    session.add(enrollment)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        constraint = _constraint_name(e)
        if constraint is not None:
            is_duplicate_cpf = constraint == UNIQUE_CPF_CONSTRAINT
            is_unknown_owner = constraint == OWNER_FK_CONSTRAINT
        else:
            # SQLite: só a mensagem identifica a constraint
            detail = str(e.orig).lower()
            is_duplicate_cpf = "inscricoes.cpf" in detail
            is_unknown_owner = "foreign key" in detail
        if is_duplicate_cpf:
            logger.warning(f"CPF duplicado na inscrição: cpf={enrollment.cpf}")
            raise DuplicateIdentifierError() from e
        if is_unknown_owner:
            raise ValidationError("Usuário da inscrição não existe.") from e
        raise InfrastructureError(str(e.orig)) from e
    except DataError as e:
        session.rollback()
        logger.warning(f"Valor fora dos limites da coluna: {e.orig}")
        raise ValidationError("Valor fora dos limites permitidos.") from e
    session.refresh(enrollment)
    return enrollment


def submit_enrollment(session: Session, usuario_id: int, fields: EnrollmentFields) -> Enrollment:
    """Cria a inscrição com status não definido (aguardando análise)."""
    enrollment = Enrollment(usuario_id=usuario_id, status_aprovacao=None)
    _apply_fields(enrollment, fields)
    _save(session, enrollment)
    logger.info(f"Inscrição criada: id={enrollment.id}, usuario_id={usuario_id}")
    return enrollment


def get_enrollment_by_owner(session: Session, usuario_id: int) -> Enrollment:
    """
    Retorna a inscrição do usuário. Se houver mais de uma, a mais recente.

    Raises:
        NotFoundError: Usuário sem inscrição
    """
    enrollment = session.exec(
        select(Enrollment)
        .where(Enrollment.usuario_id == usuario_id)
        .order_by(Enrollment.data_inscricao.desc(), Enrollment.id.desc())
    ).first()
    if enrollment is None:
        raise NotFoundError("Nenhuma inscrição encontrada para este usuário.")
    return enrollment


def resubmit_enrollment(session: Session, enrollment_id: int, fields: EnrollmentFields) -> Enrollment:
    """
    Candidato reenviou o formulário: sobrescreve os campos e volta o status para EM ANÁLISE,
    seja qual for o status anterior.
    """
    enrollment = get_enrollment(session, enrollment_id)
    previous_status = enrollment.status_aprovacao
    _apply_fields(enrollment, fields)
    enrollment.status_aprovacao = EnrollmentStatus.UNDER_REVIEW.value
    _save(session, enrollment)
    logger.info(f"Inscrição reenviada: id={enrollment_id}, status anterior={previous_status!r}")
    return enrollment


def admin_edit_enrollment(session: Session, enrollment_id: int, fields: EnrollmentFields) -> Enrollment:
    """Correção de dados pelo administrador. O status não muda."""
    enrollment = get_enrollment(session, enrollment_id)
    _apply_fields(enrollment, fields)
    _save(session, enrollment)
    logger.info(f"Inscrição editada pelo admin: id={enrollment_id}")
    return enrollment


def set_enrollment_status(session: Session, enrollment_id: int, status: str) -> EnrollmentStatus:
    """
    Altera só o status da inscrição.

    Raises:
        ValidationError: Rótulo de status desconhecido
        NotFoundError: Inscrição inexistente
    """
    try:
        new_status = EnrollmentStatus.parse(status)
    except ValueError as e:
        raise ValidationError(f"Status inválido: {status}") from e

    enrollment = get_enrollment(session, enrollment_id)
    enrollment.status_aprovacao = new_status.value
    _save(session, enrollment)
    logger.info(f"Status da inscrição alterado: id={enrollment_id}, status={new_status.value}")
    return new_status
