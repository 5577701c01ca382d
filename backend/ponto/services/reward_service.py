"""
Serviço de recompensas. Cada atualização substitui a lista inteira
(apaga tudo e reinsere) numa única transação.
"""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ponto.models.reward import Reward
from ponto.schemas.reward import RewardItem

logger = logging.getLogger(__name__)


def list_rewards(db: Session) -> List[Reward]:
    return db.execute(select(Reward).order_by(Reward.id)).scalars().all()


def replace_rewards(db: Session, items: List[RewardItem]) -> List[Reward]:
    try:
        db.execute(delete(Reward))
        rewards = [Reward(nome=item.nome, quantidade=item.quantidade) for item in items]
        db.add_all(rewards)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info("Recompensas substituídas : %d itens", len(rewards))
    return list_rewards(db)
