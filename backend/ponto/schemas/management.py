"""
Schemas Pydantic para a gestão de gestores (rotas /api/gestao).
"""

from typing import List

from pydantic import BaseModel

from ponto.schemas.user import UserProfile


class ManagerListResponse(BaseModel):
    status: str = "sucesso"
    gestores: List[UserProfile]


class ManagerRemovedResponse(BaseModel):
    status: str = "sucesso"
    mensagem: str
    usuario_id: str
