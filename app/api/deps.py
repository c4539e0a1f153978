from dataclasses import dataclass

from fastapi import Depends, Header, Request

from app.core.config import settings
from app.core.errors import AuthenticationError
from app.core.tokens import decode_access
from app.db.session import get_db  # noqa: F401  (reexport para as rotas)
from app.services.storage import FileStorage, get_storage

@dataclass
class Principal:
    sub: str
    scope: str = ""

# ----------------------------------------------------------------------
# Lê o Bearer do header Authorization (sem usar OAuth2PasswordBearer)
# ----------------------------------------------------------------------
def get_bearer_token(authorization: str = Header(None, alias="Authorization")) -> str:
    if not authorization:
        raise AuthenticationError("Missing Authorization header")
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Invalid Authorization header")
    return parts[1]

def get_current_principal(token: str = Depends(get_bearer_token)) -> Principal:
    payload = decode_access(token)
    if not payload:
        raise AuthenticationError("Invalid or missing token")
    return Principal(sub=str(payload["sub"]), scope=payload.get("scope") or "")

def get_file_storage() -> FileStorage:
    return get_storage()

def get_public_base_url(request: Request) -> str:
    # prioridade: env PUBLIC_BASE_URL; senão, monta com host da requisição
    return settings.PUBLIC_BASE_URL or str(request.base_url).rstrip("/")
