from sqlalchemy import CheckConstraint, Column, Integer, String

from ponto.database import Base


class Reward(Base):
    __tablename__ = "recompensas"
    __table_args__ = (
        CheckConstraint("quantidade >= 0", name="ck_recompensas_quantidade"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(120), nullable=False)
    quantidade = Column(Integer, nullable=False, default=0)
