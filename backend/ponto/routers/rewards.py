"""
Router das recompensas : listagem pública e substituição completa por gestores.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ponto.auth.dependencies import require_role
from ponto.database import get_db
from ponto.exceptions import InternalError
from ponto.models.session import UserSession
from ponto.models.user import ROLE_GESTOR
from ponto.schemas.reward import RewardItem, RewardResponse
from ponto.services import reward_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recompensas", tags=["Recompensas"])


@router.get("", response_model=List[RewardResponse], summary="Listar recompensas")
def list_rewards(db: Session = Depends(get_db)):
    try:
        return reward_service.list_rewards(db)
    except SQLAlchemyError as exc:
        logger.exception("Erro ao listar recompensas")
        raise InternalError("Erro ao listar recompensas.") from exc


@router.put("", response_model=List[RewardResponse], summary="Substituir recompensas")
def replace_rewards(
    items: List[RewardItem],
    user_session: UserSession = Depends(require_role(ROLE_GESTOR)),
    db: Session = Depends(get_db),
):
    """Substitui a lista inteira de recompensas (apaga tudo e reinsere, numa transação)."""
    try:
        return reward_service.replace_rewards(db, items)
    except SQLAlchemyError as exc:
        logger.exception("Erro ao atualizar recompensas")
        raise InternalError("Erro ao atualizar recompensas.") from exc
