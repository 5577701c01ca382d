"""
Planificador APScheduler para a limpeza periódica das sessões expiradas.

O job roda a cada SESSION_PURGE_INTERVAL_MINUTES e apaga da tabela sessoes
as linhas cujo expira_em já passou.
"""

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from ponto.auth.sessions import DatabaseSessionStore
from ponto.config import settings
from ponto.database import SessionLocal

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler()


def _purge_expired_sessions() -> None:
    """Tarefa agendada : remove as sessões expiradas."""
    db = SessionLocal()
    try:
        DatabaseSessionStore(db).purge_expired()
    except Exception as exc:
        logger.error("Erro na limpeza de sessões expiradas : %s", exc)
    finally:
        db.close()


def start_scheduler() -> None:
    """Inicia o planificador em segundo plano (chamado no startup da API)."""
    scheduler.add_job(
        _purge_expired_sessions,
        trigger="interval",
        minutes=settings.SESSION_PURGE_INTERVAL_MINUTES,
        id="purge_expired_sessions",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        "Scheduler iniciado, limpeza de sessões a cada %d minutos.",
        settings.SESSION_PURGE_INTERVAL_MINUTES,
    )


def stop_scheduler() -> None:
    """Para o planificador (chamado no shutdown da API)."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler parado.")
