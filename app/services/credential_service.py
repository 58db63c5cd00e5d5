"""
Cadastro e login de contas de candidatos.
A senha só existe em memória durante a requisição: grava-se o digest bcrypt e nada é logado.
"""
import logging
import os

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.auth.password import hash_password, verify_password
from app.exceptions import DuplicateEmailError, ForbiddenError, InvalidCredentialsError
from app.model.account import Account

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_registration_denylist() -> set[str]:
    """Emails bloqueados para cadastro (REGISTRATION_DENYLIST, separados por vírgula)."""
    raw = os.getenv("REGISTRATION_DENYLIST", "")
    return {normalize_email(e) for e in raw.split(",") if e.strip()}


def register_account(session: Session, nome: str, email: str, senha: str) -> Account:
    """
    Cria uma conta nova.

    A denylist é consultada antes de qualquer hash ou acesso ao banco.
    A unicidade do email é garantida pela constraint uq_usuarios_email.

    Raises:
        ForbiddenError: Email na denylist
        DuplicateEmailError: Email já cadastrado
        InfrastructureError: Falha ao gerar o hash ou ao gravar
    """
    email = normalize_email(email)
    if email in get_registration_denylist():
        logger.warning(f"Cadastro bloqueado pela denylist: email={email}")
        raise ForbiddenError("Cadastro não permitido para este email.")

    account = Account(nome_completo=nome, email=email, senha=hash_password(senha))
    session.add(account)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"Cadastro com email duplicado: email={email}")
        raise DuplicateEmailError() from e
    session.refresh(account)

    logger.info(f"Conta criada: id={account.id}, email={email}")
    return account


def authenticate(session: Session, email: str, senha: str) -> Account:
    """
    Confere email e senha.

    Email desconhecido e senha errada levantam o mesmo erro, para não revelar
    quais emails existem.

    Raises:
        InvalidCredentialsError: Credenciais não conferem
    """
    email = normalize_email(email)
    # lower() no banco: contas antigas podem ter sido gravadas com maiúsculas
    account = session.exec(select(Account).where(func.lower(Account.email) == email)).first()
    if account is None or not verify_password(senha, account.senha):
        logger.info(f"Login recusado: email={email}")
        raise InvalidCredentialsError()
    return account


def account_profile(account: Account) -> dict:
    """Dados públicos da conta (sem o digest da senha)."""
    return {
        "id": account.id,
        "nome_completo": account.nome_completo,
        "email": account.email,
    }
