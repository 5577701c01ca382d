"""
Armazenamento de sessões do lado do servidor.

Os handlers dependem apenas do protocolo SessionStore (criar / buscar / destruir
por token); DatabaseSessionStore é a implementação sobre a tabela sessoes e pode
ser trocada por um armazenamento distribuído sem alterar as rotas.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional, Protocol

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ponto.config import settings
from ponto.models.session import UserSession

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    def create(self, user_id: str, role: str) -> UserSession: ...

    def get(self, token: str) -> Optional[UserSession]: ...

    def destroy(self, token: str) -> None: ...

    def destroy_for_user(self, user_id: str, keep: Optional[str] = None) -> int: ...

    def purge_expired(self) -> int: ...


class DatabaseSessionStore:
    def __init__(self, db: Session, ttl_minutes: int | None = None):
        self.db = db
        self.ttl = timedelta(minutes=ttl_minutes or settings.SESSION_EXPIRE_MINUTES)

    def create(self, user_id: str, role: str) -> UserSession:
        user_session = UserSession(
            token=secrets.token_urlsafe(32),
            usuario_id=user_id,
            papel=role,
            expira_em=datetime.now() + self.ttl,
        )
        self.db.add(user_session)
        self.db.commit()
        self.db.refresh(user_session)
        return user_session

    def get(self, token: str) -> Optional[UserSession]:
        """Retorna a sessão se existir e não estiver expirada."""
        return self.db.execute(
            select(UserSession).where(
                UserSession.token == token,
                UserSession.expira_em > datetime.now(),
            )
        ).scalar()

    def destroy(self, token: str) -> None:
        self.db.execute(delete(UserSession).where(UserSession.token == token))
        self.db.commit()

    def destroy_for_user(self, user_id: str, keep: Optional[str] = None) -> int:
        """Remove todas as sessões do usuário, exceto opcionalmente a sessão `keep`."""
        stmt = delete(UserSession).where(UserSession.usuario_id == user_id)
        if keep is not None:
            stmt = stmt.where(UserSession.token != keep)
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount or 0

    def purge_expired(self) -> int:
        result = self.db.execute(
            delete(UserSession).where(UserSession.expira_em <= datetime.now())
        )
        self.db.commit()
        removed = result.rowcount or 0
        if removed:
            logger.info("Sessões expiradas removidas : %d", removed)
        return removed
