"""
Modelo SQLAlchemy para os usuários.
O saldo (moedas) é desnormalizado e só muda pelo registro de ponto ou pelo reset administrativo.
"""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, func

from ponto.database import Base

ROLE_COLABORADOR = "colaborador"
ROLE_GESTOR = "gestor"
ROLE_ADMIN = "admin"
ROLES = (ROLE_COLABORADOR, ROLE_GESTOR, ROLE_ADMIN)


def new_user_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "usuarios"
    __table_args__ = (
        CheckConstraint("moedas >= 0", name="ck_usuarios_moedas_nao_negativas"),
    )

    id = Column(String(32), primary_key=True, default=new_user_id)
    nome = Column(String(120), nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    matricula = Column(String(50), unique=True, nullable=True)
    senha_hash = Column(String(255), nullable=False)
    avatar = Column(String(500), nullable=False)
    moedas = Column(Integer, nullable=False, default=0)
    papel = Column(String(20), nullable=False, default=ROLE_COLABORADOR)  # colaborador, gestor, admin
    criado_em = Column(DateTime, server_default=func.now())
