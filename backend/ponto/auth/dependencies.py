"""
Dependências FastAPI de autenticação: sessão a partir do cookie e exigência de papel.
"""

import jwt
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ponto.auth import jwt_handler
from ponto.auth.permissions import authorize
from ponto.auth.sessions import DatabaseSessionStore, SessionStore
from ponto.config import settings
from ponto.database import get_db
from ponto.exceptions import AuthError, ForbiddenError
from ponto.models.session import UserSession


def get_session_store(db: Session = Depends(get_db)) -> SessionStore:
    return DatabaseSessionStore(db)


def get_optional_session(
    request: Request,
    store: SessionStore = Depends(get_session_store),
) -> UserSession | None:
    """Sessão ativa referenciada pelo cookie, ou None (cookie ausente, adulterado ou expirado)."""
    cookie = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not cookie:
        return None
    try:
        payload = jwt_handler.decode_session_cookie(cookie)
    except jwt.PyJWTError:
        return None
    token = payload.get("sid")
    if not token:
        return None
    return store.get(token)


def get_current_session(
    user_session: UserSession | None = Depends(get_optional_session),
) -> UserSession:
    if user_session is None:
        raise AuthError("Sessão inválida ou expirada. Faça login novamente.")
    return user_session


def require_role(role: str):
    """Fábrica de dependência: 401 sem sessão, 403 se o papel for insuficiente."""

    def _dependency(user_session: UserSession = Depends(get_current_session)) -> UserSession:
        if not authorize(user_session, role):
            raise ForbiddenError("Permissão insuficiente para esta operação.")
        return user_session

    return _dependency
