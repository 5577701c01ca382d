"""
Router das campanhas : listagem pública e criação por gestores.
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
from ponto.schemas.campaign import CampaignCreate, CampaignResponse
from ponto.services import campaign_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/campanhas", tags=["Campanhas"])


@router.get("", response_model=List[CampaignResponse], summary="Listar campanhas")
def list_campaigns(db: Session = Depends(get_db)):
    try:
        return campaign_service.list_campaigns(db)
    except SQLAlchemyError as exc:
        logger.exception("Erro ao listar campanhas")
        raise InternalError("Erro ao listar campanhas.") from exc


@router.post("", response_model=CampaignResponse, status_code=201, summary="Criar campanha")
def create_campaign(
    data: CampaignCreate,
    user_session: UserSession = Depends(require_role(ROLE_GESTOR)),
    db: Session = Depends(get_db),
):
    """Cria uma campanha com a lista ordenada de perguntas."""
    try:
        return campaign_service.create_campaign(db, data)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Erro ao criar campanha")
        raise InternalError("Erro ao criar campanha.") from exc
