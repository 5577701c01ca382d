"""
Serviço de campanhas (conteúdo estático : criação e listagem).
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from ponto.models.campaign import Campaign
from ponto.schemas.campaign import CampaignCreate

logger = logging.getLogger(__name__)


def create_campaign(db: Session, data: CampaignCreate) -> Campaign:
    campaign = Campaign(tipo=data.tipo, titulo=data.titulo, perguntas=list(data.perguntas))
    db.add(campaign)
    db.commit()
    db.refresh(campaign)
    logger.info("Campanha criada : %s (%d perguntas)", campaign.id, len(campaign.perguntas))
    return campaign


def list_campaigns(db: Session) -> List[Campaign]:
    """Campanhas da mais recente para a mais antiga."""
    return db.execute(
        select(Campaign).order_by(Campaign.criado_em.desc(), Campaign.id.desc())
    ).scalars().all()
