"""
Modelo SQLAlchemy para as campanhas (conteúdo estático: criação e listagem).
"""

from sqlalchemy import JSON, Column, DateTime, Integer, String, func

from ponto.database import Base


class Campaign(Base):
    __tablename__ = "campanhas"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tipo = Column(String(50), nullable=False)
    titulo = Column(String(200), nullable=False)
    perguntas = Column(JSON, nullable=False, default=list)  # lista ordenada de perguntas
    criado_em = Column(DateTime, server_default=func.now())
