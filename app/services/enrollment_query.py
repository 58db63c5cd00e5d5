"""
Query da listagem de administração: busca textual + ordenação por prioridade.
Inscrições ainda sem decisão vêm antes das resolvidas; dentro de cada grupo, as mais recentes primeiro.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import case, or_
from sqlmodel import Session, select

from app.model.account import Account
from app.model.enrollment import Enrollment, UNRESOLVED_STATUS_LABELS
from app.services.enrollment_service import serialize_enrollment


def priority_bucket():
    """0 para status NULL, vazio, PENDENTE ou EM ANÁLISE; 1 para o resto."""
    return case(
        (
            or_(
                Enrollment.status_aprovacao.is_(None),
                Enrollment.status_aprovacao.in_(UNRESOLVED_STATUS_LABELS),
            ),
            0,
        ),
        else_=1,
    )


def get_review_list_query(busca: Optional[str] = None):
    """
    Retorna o select (Enrollment, email do dono) já filtrado e ordenado.

    `busca` procura, sem diferenciar maiúsculas, substring em nome, CPF ou status.
    Curingas de LIKE digitados pelo usuário (% e _) são tratados como texto.
    """
    query = select(Enrollment, Account.email).outerjoin(Account, Enrollment.usuario_id == Account.id)

    if busca and busca.strip():
        term = busca.strip()
        query = query.where(
            or_(
                Enrollment.nome_completo.icontains(term, autoescape=True),
                Enrollment.cpf.icontains(term, autoescape=True),
                Enrollment.status_aprovacao.icontains(term, autoescape=True),
            )
        )

    return query.order_by(
        priority_bucket().asc(),
        Enrollment.data_inscricao.desc(),
        Enrollment.id.desc(),
    )


def list_enrollments_for_review(session: Session, busca: Optional[str] = None) -> list[dict]:
    rows = session.exec(get_review_list_query(busca)).all()
    return [serialize_enrollment(enrollment, email=email) for enrollment, email in rows]
