from datetime import datetime, timedelta, timezone

import jwt

from ponto.config import settings


def create_session_cookie(session_token: str, user_id: str, expires_minutes: int | None = None) -> str:
    """Assina o token opaco da sessão para uso como valor do cookie."""
    expire_minutes = expires_minutes or settings.SESSION_EXPIRE_MINUTES
    now = datetime.now(timezone.utc)
    payload = {
        "sid": session_token,
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session_cookie(value: str) -> dict:
    return jwt.decode(value, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
