from pydantic import BaseModel


class RankingEntry(BaseModel):
    id: str
    nome: str
    avatar: str
    bip: int

    model_config = {"from_attributes": True}


class ResetRankingResponse(BaseModel):
    status: str = "sucesso"
    mensagem: str
    usuarios_afetados: int
    pontos_removidos: int
