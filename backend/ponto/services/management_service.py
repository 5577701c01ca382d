"""
Serviço de gestão : listagem, criação e remoção de usuários com papel gestor.
"""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ponto.exceptions import NotFoundError
from ponto.models.point import PointEvent
from ponto.models.session import UserSession
from ponto.models.user import ROLE_GESTOR, User
from ponto.schemas.user import RegisterRequest
from ponto.services import user_service

logger = logging.getLogger(__name__)


def list_managers(db: Session) -> List[User]:
    return db.execute(
        select(User).where(User.papel == ROLE_GESTOR).order_by(User.nome, User.id)
    ).scalars().all()


def create_manager(db: Session, data: RegisterRequest) -> User:
    return user_service.register_user(db, data, role=ROLE_GESTOR)


def delete_manager(db: Session, user_id: str) -> None:
    """
    Remove definitivamente um gestor, suas sessões e seus pontos.
    Levanta NotFoundError se o usuário não existir ou não for gestor.
    """
    user = db.get(User, user_id)
    if user is None or user.papel != ROLE_GESTOR:
        raise NotFoundError("Gestor não encontrado.")

    try:
        db.execute(delete(UserSession).where(UserSession.usuario_id == user_id))
        db.execute(delete(PointEvent).where(PointEvent.usuario_id == user_id))
        db.delete(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info("Gestor removido : %s", user_id)
