import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlmodel import Session

from app.api.admin import router as admin_router
from app.api.auth import router as auth_router
from app.db.session import get_session
from app.services.enrollment_service import (
    EnrollmentCreate,
    EnrollmentFields,
    get_enrollment_by_owner,
    resubmit_enrollment,
    serialize_enrollment,
    submit_enrollment,
)

logger = logging.getLogger(__name__)

router = APIRouter()  # Sem tag padrão - cada endpoint define sua própria tag
router.include_router(auth_router)
router.include_router(admin_router)


@router.get("/", response_class=PlainTextResponse, tags=["Health"])
def health():
    return "API de inscrições funcionando!"


@router.post("/inscricao", status_code=201, tags=["Inscrição"])
def criar_inscricao(body: EnrollmentCreate, session: Session = Depends(get_session)):
    """Recebe o formulário socioeconômico. Campos opcionais vazios são gravados como NULL."""
    enrollment = submit_enrollment(session, body.usuario_id, body)
    return {"message": "Inscrição realizada!", "id": enrollment.id}


@router.get("/inscricao/usuario/{usuario_id}", tags=["Inscrição"])
def buscar_inscricao_do_usuario(usuario_id: int, session: Session = Depends(get_session)):
    enrollment = get_enrollment_by_owner(session, usuario_id)
    return serialize_enrollment(enrollment)


@router.put("/inscricao/{inscricao_id}", tags=["Inscrição"])
def reenviar_inscricao(
    inscricao_id: int,
    body: EnrollmentFields,
    session: Session = Depends(get_session),
):
    """
    Candidato editou e reenviou os dados.
    O status volta para EM ANÁLISE para o administrador revisar de novo.
    """
    resubmit_enrollment(session, inscricao_id, body)
    logger.info(f"Inscrição {inscricao_id} enviada de volta para análise")
    return {"message": "Inscrição atualizada! Seus dados foram enviados para nova análise."}
