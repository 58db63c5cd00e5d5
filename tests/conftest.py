"""Pytest configuration and fixtures."""

import os

# Custo mínimo do bcrypt nos testes; precisa estar definido antes de importar app.auth.password
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import datetime, timezone
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlmodel import Session

from app.db.session import build_engine, create_tables, get_session
from app.main import app
from app.model import Account, Enrollment
from app.services.credential_service import register_account
from app.services.enrollment_service import EnrollmentFields


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REGISTRATION_DENYLIST", raising=False)
    monkeypatch.delenv("ADMIN_API_KEY", raising=False)


@pytest.fixture
def engine() -> Engine:
    """SQLite em memória com o schema completo."""
    engine = build_engine("sqlite://")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Session:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine: Engine) -> TestClient:
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def make_account(session: Session) -> Callable[..., Account]:
    counter = {"n": 0}

    def _make(email: str | None = None, senha: str = "segredo123") -> Account:
        counter["n"] += 1
        email = email or f"candidato{counter['n']}@exemplo.com"
        return register_account(session, f"Candidato {counter['n']}", email, senha)

    return _make


@pytest.fixture
def make_enrollment(session: Session, make_account) -> Callable[..., Enrollment]:
    """Grava uma inscrição direto no banco, com data e status controlados."""

    def _make(
        cpf: str,
        *,
        nome: str = "Maria da Silva",
        status: str | None = None,
        day: int = 1,
        usuario_id: int | None = None,
    ) -> Enrollment:
        if usuario_id is None:
            usuario_id = make_account().id
        enrollment = Enrollment(
            usuario_id=usuario_id,
            nome_completo=nome,
            cpf=cpf,
            status_aprovacao=status,
            data_inscricao=datetime(2026, 1, day, 12, 0, tzinfo=timezone.utc),
        )
        session.add(enrollment)
        session.commit()
        session.refresh(enrollment)
        return enrollment

    return _make


@pytest.fixture
def sample_fields() -> EnrollmentFields:
    return EnrollmentFields(
        nome_completo="Maria da Silva",
        cpf="11122233344",
        idade=34,
        genero="F",
        endereco="Rua das Flores, 123",
        renda_familiar="1500.00",
        numero_membros_familia=4,
        despesas_mensais="900.50",
        nivel_escolaridade="Ensino Médio",
    )
