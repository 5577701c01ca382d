"""
Modelo SQLAlchemy para os registros de ponto.

Append-only : uma linha por batida de ponto bem-sucedida, nunca alterada.
A coluna moedas guarda o valor efetivamente creditado na inserção, de modo que
o histórico continua correto mesmo se MOEDAS_POR_PONTO mudar depois.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String

from ponto.database import Base


class PointEvent(Base):
    __tablename__ = "pontos"
    __table_args__ = (
        Index("idx_pontos_usuario_registro", "usuario_id", "registrado_em"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    usuario_id = Column(String(32), ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False)
    registrado_em = Column(DateTime, nullable=False)
    moedas = Column(Integer, nullable=False)
