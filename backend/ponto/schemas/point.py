"""
Schemas Pydantic para o registro de ponto, saldo e histórico.
"""

from typing import List

from pydantic import BaseModel, field_validator


class PointRequest(BaseModel):
    """Batida de ponto (POST /api/ponto)."""
    usuario_id: str

    @field_validator("usuario_id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        # Clientes antigos enviam o id como número.
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("usuario_id")
    @classmethod
    def id_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("ID do usuário é obrigatório para registrar o ponto.")
        return v.strip()


class PointResponse(BaseModel):
    status: str = "sucesso"
    mensagem: str
    moedas: int
    moedasAdicionadas: int


class BalanceResponse(BaseModel):
    status: str = "sucesso"
    moedas: int


class PointHistoryItem(BaseModel):
    """Um ponto do histórico ; data em dd/mm/aaaa e hora em HH:MM:SS."""
    id: int
    data: str
    hora: str
    moedas: int


class PointHistoryResponse(BaseModel):
    status: str = "sucesso"
    pontos: List[PointHistoryItem]
