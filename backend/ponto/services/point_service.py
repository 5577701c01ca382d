"""
Serviço de registro de ponto e saldo de moedas.

Invariante : para cada usuário, usuarios.moedas == soma de pontos.moedas.
A inserção do ponto e o crédito do saldo acontecem numa única transação ;
o incremento é calculado pelo banco (moedas = moedas + n) e o lock de escrita
do SQLite serializa batidas simultâneas, de modo que nenhum crédito se perde.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ponto.config import settings
from ponto.exceptions import NotFoundError
from ponto.models.point import PointEvent
from ponto.models.user import User
from ponto.schemas.point import PointHistoryItem

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%H:%M:%S"


def register_point(
    db: Session,
    user_id: str,
    amount: Optional[int] = None,
    now: Optional[datetime] = None,
) -> tuple[int, int]:
    """
    Registra uma batida de ponto e credita as moedas do usuário.

    Ordem dentro da transação :
    1. UPDATE do saldo (adquire o lock de escrita ; 0 linhas → usuário inexistente)
    2. INSERT do ponto com o valor creditado
    3. Leitura do saldo atualizado, depois COMMIT

    Qualquer falha desfaz as duas escritas. Retorna (saldo, moedas creditadas).
    """
    credited = settings.MOEDAS_POR_PONTO if amount is None else amount
    registered_at = now or datetime.now()

    try:
        result = db.execute(
            update(User)
            .where(User.id == user_id)
            .values(moedas=User.moedas + credited)
        )
        if result.rowcount == 0:
            db.rollback()
            raise NotFoundError("Usuário não encontrado.")

        db.add(PointEvent(usuario_id=user_id, registrado_em=registered_at, moedas=credited))
        db.flush()

        balance = db.execute(select(User.moedas).where(User.id == user_id)).scalar_one()
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info("Ponto registrado : usuário %s, +%d moedas, saldo %d", user_id, credited, balance)
    return balance, credited


def get_balance(db: Session, user_id: str) -> int:
    balance = db.execute(select(User.moedas).where(User.id == user_id)).scalar()
    if balance is None:
        raise NotFoundError("Usuário não encontrado.")
    return balance


def get_history(db: Session, user_id: str) -> List[PointHistoryItem]:
    """Histórico de pontos do usuário, do mais recente ao mais antigo (id desempata)."""
    exists = db.execute(select(User.id).where(User.id == user_id)).scalar()
    if exists is None:
        raise NotFoundError("Usuário não encontrado.")

    events = db.execute(
        select(PointEvent)
        .where(PointEvent.usuario_id == user_id)
        .order_by(PointEvent.registrado_em.desc(), PointEvent.id.desc())
    ).scalars().all()

    return [_to_history_item(e) for e in events]


def _to_history_item(event: PointEvent) -> PointHistoryItem:
    return PointHistoryItem(
        id=event.id,
        data=event.registrado_em.strftime(DATE_FORMAT),
        hora=event.registrado_em.strftime(TIME_FORMAT),
        moedas=event.moedas,
    )
