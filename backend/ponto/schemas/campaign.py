"""
Schemas Pydantic para as campanhas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator


class CampaignCreate(BaseModel):
    tipo: str
    titulo: str
    perguntas: List[str]

    @field_validator("tipo", "titulo")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Tipo e título da campanha são obrigatórios.")
        return v.strip()

    @field_validator("perguntas")
    @classmethod
    def at_least_one_question(cls, v: List[str]) -> List[str]:
        questions = [q.strip() for q in v if q.strip()]
        if not questions:
            raise ValueError("A campanha deve ter ao menos uma pergunta.")
        return questions


class CampaignResponse(BaseModel):
    id: int
    tipo: str
    titulo: str
    perguntas: List[str]
    criado_em: Optional[datetime]

    model_config = {"from_attributes": True}
