"""Hierarquia de exceções de domínio do backend de inscrições.

Cada classe sabe o status HTTP e a chave do payload (`error` ou `message`)
usados pelo handler registrado em `app.main`.
"""


class InscricaoError(Exception):
    """Base para todos os erros de domínio."""

    status_code: int = 500
    response_key: str = "error"
    default_message: str = "Erro interno do servidor."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> dict[str, str]:
        return {self.response_key: self.message}


class ValidationError(InscricaoError):
    """Campo obrigatório ausente ou valor fora do domínio aceito."""

    status_code = 400
    default_message = "Dados inválidos."


class ConflictError(InscricaoError):
    """Violação de unicidade (email ou CPF)."""

    status_code = 409
    default_message = "Registro duplicado."


class DuplicateEmailError(ConflictError):
    """Email já usado por outra conta."""

    default_message = "Email já cadastrado."


class DuplicateIdentifierError(ConflictError):
    """CPF já usado por outra inscrição."""

    status_code = 400
    default_message = "CPF já cadastrado."


class InvalidCredentialsError(InscricaoError):
    """Login falhou. Mesma mensagem para email desconhecido e senha errada."""

    status_code = 401
    response_key = "message"
    default_message = "Email ou senha incorretos"


class ForbiddenError(InscricaoError):
    """Operação bloqueada (email em denylist, chave de admin ausente)."""

    status_code = 403
    default_message = "Acesso negado."


class NotFoundError(InscricaoError):
    status_code = 404
    response_key = "message"
    default_message = "Registro não encontrado."


class InfrastructureError(InscricaoError):
    """Falha do banco ou do hash de senha. Detalhe só vai para o log."""
