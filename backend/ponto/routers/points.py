"""
Router do ponto : batida de ponto, saldo de moedas e histórico.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ponto.database import get_db
from ponto.exceptions import InternalError
from ponto.schemas.point import BalanceResponse, PointHistoryResponse, PointRequest, PointResponse
from ponto.services import point_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Ponto"])


@router.post("/ponto", response_model=PointResponse, summary="Bater o ponto")
def register_point(data: PointRequest, db: Session = Depends(get_db)):
    """
    Registra o ponto do usuário e credita MOEDAS_POR_PONTO moedas,
    numa única transação. Usuário inexistente → 404.
    """
    try:
        balance, credited = point_service.register_point(db, data.usuario_id)
    except SQLAlchemyError as exc:
        logger.exception("Erro ao registrar ponto do usuário %s", data.usuario_id)
        raise InternalError("Erro ao registrar ponto.") from exc
    return PointResponse(
        mensagem="Ponto registrado e moedas adicionadas!",
        moedas=balance,
        moedasAdicionadas=credited,
    )


@router.get("/moedas/{usuario_id}", response_model=BalanceResponse, summary="Saldo de moedas")
def get_balance(usuario_id: str, db: Session = Depends(get_db)):
    """Retorna o saldo atual do usuário."""
    try:
        balance = point_service.get_balance(db, usuario_id)
    except SQLAlchemyError as exc:
        logger.exception("Erro ao buscar moedas do usuário %s", usuario_id)
        raise InternalError("Erro ao buscar moedas.") from exc
    return BalanceResponse(moedas=balance)


@router.get("/pontos/{usuario_id}", response_model=PointHistoryResponse, summary="Histórico de pontos")
def get_history(usuario_id: str, db: Session = Depends(get_db)):
    """Lista os pontos do usuário, do mais recente ao mais antigo, com as moedas creditadas em cada um."""
    try:
        points = point_service.get_history(db, usuario_id)
    except SQLAlchemyError as exc:
        logger.exception("Erro ao buscar histórico de pontos do usuário %s", usuario_id)
        raise InternalError("Erro ao buscar histórico de pontos.") from exc
    return PointHistoryResponse(pontos=points)
