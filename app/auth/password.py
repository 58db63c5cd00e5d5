import os

import bcrypt

from app.exceptions import InfrastructureError, ValidationError

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

# Limite do bcrypt; acima disso o bcrypt 5 recusa a senha em vez de truncar.
MAX_PASSWORD_BYTES = 72


def password_too_long(senha: str) -> bool:
    return len(senha.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(senha: str) -> str:
    """
    Gera o digest bcrypt (salt embutido) da senha.

    Raises:
        ValidationError: Senha com mais de 72 bytes
        InfrastructureError: Se o bcrypt falhar
    """
    if password_too_long(senha):
        raise ValidationError(f"Senha não pode ter mais de {MAX_PASSWORD_BYTES} bytes.")
    try:
        digest = bcrypt.hashpw(senha.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    except (ValueError, TypeError) as e:
        raise InfrastructureError("Erro interno ao processar senha.") from e
    return digest.decode("utf-8")


def verify_password(senha: str, digest: str) -> bool:
    """Compara a senha com o digest gravado. Digest corrompido ou senha longa demais contam como senha errada."""
    if password_too_long(senha):
        return False
    try:
        return bcrypt.checkpw(senha.encode("utf-8"), digest.encode("utf-8"))
    except ValueError:
        return False
