"""
Router do ranking : leaderboard completo, top 3 e reset administrativo.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ponto.auth.dependencies import require_role
from ponto.database import get_db
from ponto.exceptions import InternalError
from ponto.models.session import UserSession
from ponto.models.user import ROLE_GESTOR
from ponto.schemas.ranking import RankingEntry, ResetRankingResponse
from ponto.services import ranking_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Ranking"])


@router.get("/ranking", response_model=List[RankingEntry], summary="Ranking completo")
def get_ranking(
    limite: Optional[int] = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    """Usuários por saldo decrescente (id como desempate). `limite` restringe aos N primeiros."""
    try:
        return ranking_service.get_ranking(db, limite)
    except SQLAlchemyError as exc:
        logger.exception("Erro ao buscar ranking")
        raise InternalError("Erro ao buscar ranking.") from exc


@router.get("/ranking/top3", response_model=List[RankingEntry], summary="Top 3 do ranking")
def get_top3(db: Session = Depends(get_db)):
    try:
        return ranking_service.get_ranking(db, 3)
    except SQLAlchemyError as exc:
        logger.exception("Erro ao buscar top 3")
        raise InternalError("Erro ao buscar ranking.") from exc


@router.post("/reset-ranking", response_model=ResetRankingResponse, summary="Zerar o ranking")
def reset_ranking(
    limpar_historico: bool = Query(default=False),
    user_session: UserSession = Depends(require_role(ROLE_GESTOR)),
    db: Session = Depends(get_db),
):
    """
    Zera o saldo de todos os usuários (gestor ou admin).

    Sem `limpar_historico` os pontos continuam no histórico e o saldo deixa de
    refletir a soma dos pontos. Com `limpar_historico=true` o histórico também é
    apagado, na mesma transação.
    """
    try:
        users_affected, points_removed = ranking_service.reset_ranking(db, limpar_historico)
    except SQLAlchemyError as exc:
        logger.exception("Erro ao zerar ranking")
        raise InternalError("Erro ao zerar o ranking.") from exc
    logger.info("Reset do ranking solicitado por %s", user_session.usuario_id)
    return ResetRankingResponse(
        mensagem="Ranking zerado com sucesso.",
        usuarios_afetados=users_affected,
        pontos_removidos=points_removed,
    )
