from pydantic import BaseModel, field_validator


class RewardItem(BaseModel):
    """Recompensa disponível para troca ; a lista inteira é substituída a cada atualização."""
    nome: str
    quantidade: int

    @field_validator("nome")
    @classmethod
    def nome_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("O nome da recompensa não pode ser vazio.")
        return v.strip()

    @field_validator("quantidade")
    @classmethod
    def quantidade_not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("A quantidade não pode ser negativa.")
        return v


class RewardResponse(BaseModel):
    id: int
    nome: str
    quantidade: int

    model_config = {"from_attributes": True}
