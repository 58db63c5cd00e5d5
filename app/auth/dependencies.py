import hmac
import os
from typing import Optional

from fastapi import Header

from app.exceptions import ForbiddenError


def get_admin_api_key() -> Optional[str]:
    """Chave compartilhada das rotas /admin. Sem a variável, as rotas ficam abertas."""
    return os.getenv("ADMIN_API_KEY") or None


def require_admin(x_admin_key: Optional[str] = Header(default=None)) -> None:
    """
    Dependency das rotas de administração.

    Raises:
        ForbiddenError: Se ADMIN_API_KEY estiver configurada e o header X-Admin-Key não bater
    """
    expected = get_admin_api_key()
    if expected is None:
        return
    if not x_admin_key or not hmac.compare_digest(x_admin_key.encode("utf-8"), expected.encode("utf-8")):
        raise ForbiddenError("Acesso negado (X-Admin-Key inválida).")
