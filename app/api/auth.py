from fastapi import APIRouter, Depends
from pydantic import BaseModel, field_validator
from sqlmodel import Session

from app.auth.password import MAX_PASSWORD_BYTES, password_too_long
from app.db.session import get_session
from app.services.credential_service import account_profile, authenticate, register_account

router = APIRouter(tags=["Auth"])


class CadastroRequest(BaseModel):
    nome: str
    email: str
    senha: str

    @field_validator("nome")
    @classmethod
    def validate_nome(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Campo nome não pode estar vazio")
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not v or not v.strip() or "@" not in v:
            raise ValueError("Campo email inválido")
        # Normalizar email para lowercase
        return v.strip().lower()

    @field_validator("senha")
    @classmethod
    def validate_senha(cls, v: str) -> str:
        if not v:
            raise ValueError("Campo senha não pode estar vazio")
        if password_too_long(v):
            raise ValueError(f"Campo senha não pode ter mais de {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    email: str
    senha: str


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str
    user: dict


@router.post("/cadastro", response_model=MessageResponse, status_code=201)
def cadastro(body: CadastroRequest, session: Session = Depends(get_session)):
    """Cria a conta do candidato. A senha é gravada só como digest bcrypt."""
    register_account(session, body.nome, body.email, body.senha)
    return MessageResponse(message="Usuário criado com sucesso!")


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, session: Session = Depends(get_session)):
    """
    Confere as credenciais (sem sessão nem token: cada requisição se autentica de novo).
    Retorna o perfil da conta, nunca o digest da senha.
    """
    account = authenticate(session, body.email, body.senha)
    return LoginResponse(message="Login realizado!", user=account_profile(account))
