"""
Autorização por papel, aplicada de forma uniforme a todas as rotas protegidas.

Hierarquia : colaborador < gestor < admin.
"""

from typing import Optional

from ponto.models.session import UserSession
from ponto.models.user import ROLE_ADMIN, ROLE_COLABORADOR, ROLE_GESTOR

ROLE_LEVELS = {
    ROLE_COLABORADOR: 0,
    ROLE_GESTOR: 1,
    ROLE_ADMIN: 2,
}


def authorize(user_session: Optional[UserSession], required_role: str) -> bool:
    """True se a sessão existe e seu papel é igual ou superior ao exigido."""
    if user_session is None:
        return False
    current = ROLE_LEVELS.get(user_session.papel)
    if current is None:
        return False
    return current >= ROLE_LEVELS[required_role]
