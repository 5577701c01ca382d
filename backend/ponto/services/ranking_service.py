"""
Serviço do ranking : projeção ordenada dos usuários por saldo e reset administrativo.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ponto.models.point import PointEvent
from ponto.models.user import User
from ponto.schemas.ranking import RankingEntry

logger = logging.getLogger(__name__)


def get_ranking(db: Session, limit: Optional[int] = None) -> List[RankingEntry]:
    """
    Usuários por saldo decrescente. O id desempata, de modo que a ordem é total
    e reprodutível para qualquer conjunto de usuários.
    """
    stmt = select(User).order_by(User.moedas.desc(), User.id.asc())
    if limit is not None:
        stmt = stmt.limit(limit)
    users = db.execute(stmt).scalars().all()
    return [
        RankingEntry(id=u.id, nome=u.nome, avatar=u.avatar, bip=u.moedas)
        for u in users
    ]


def reset_ranking(db: Session, clear_history: bool = False) -> tuple[int, int]:
    """
    Zera o saldo de todos os usuários.

    Por padrão o histórico de pontos é mantido : depois do reset o saldo deixa de
    ser igual à soma dos pontos. Com clear_history=True os pontos também são
    apagados na mesma transação e a invariante volta a valer.
    Retorna (usuários afetados, pontos removidos).
    """
    try:
        users_affected = db.execute(update(User).values(moedas=0)).rowcount or 0
        points_removed = 0
        if clear_history:
            points_removed = db.execute(delete(PointEvent)).rowcount or 0
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(
        "Ranking zerado : %d usuários, %d pontos removidos (limpar_historico=%s)",
        users_affected, points_removed, clear_history,
    )
    return users_affected, points_removed
