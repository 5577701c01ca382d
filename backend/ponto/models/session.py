"""
Modelo SQLAlchemy para as sessões de login mantidas no servidor.
"""

from sqlalchemy import Column, DateTime, ForeignKey, String, func

from ponto.database import Base


class UserSession(Base):
    __tablename__ = "sessoes"

    token = Column(String(64), primary_key=True)
    usuario_id = Column(String(32), ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)
    papel = Column(String(20), nullable=False)  # snapshot do papel no momento do login
    criado_em = Column(DateTime, server_default=func.now())
    expira_em = Column(DateTime, nullable=False)
