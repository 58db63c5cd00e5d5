from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlmodel import Session

from app.auth.dependencies import require_admin
from app.db.session import get_session
from app.services.enrollment_query import list_enrollments_for_review
from app.services.enrollment_service import EnrollmentFields, admin_edit_enrollment, set_enrollment_status


router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


class StatusUpdate(BaseModel):
    status: str


@router.get("/inscricoes")
def list_inscricoes(
    session: Session = Depends(get_session),
    busca: Optional[str] = Query(None, description="Busca em nome, CPF ou status"),
):
    """
    Lista as inscrições com o email do candidato.
    Pendentes e em análise primeiro; dentro de cada grupo, mais recentes primeiro.
    """
    return list_enrollments_for_review(session, busca)


@router.put("/editar/{inscricao_id}")
def editar_inscricao(
    inscricao_id: int,
    body: EnrollmentFields,
    session: Session = Depends(get_session),
):
    """Corrige os dados da inscrição sem mexer no status."""
    admin_edit_enrollment(session, inscricao_id, body)
    return {"message": "Inscrição atualizada com sucesso!"}


@router.put("/atualizar/{inscricao_id}")
def atualizar_status(
    inscricao_id: int,
    body: StatusUpdate,
    session: Session = Depends(get_session),
):
    new_status = set_enrollment_status(session, inscricao_id, body.status)
    return {"message": f"Status alterado para {new_status.value}"}
