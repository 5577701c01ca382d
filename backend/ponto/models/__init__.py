# Importa todos os modelos para registrar suas tabelas em Base.metadata
# antes que o SQLAlchemy tente resolver as chaves estrangeiras entre modelos.
# pontos.usuario_id e sessoes.usuario_id referenciam usuarios.id.

from ponto.models.user import User  # noqa: F401  deve preceder point e session
from ponto.models.point import PointEvent  # noqa: F401
from ponto.models.session import UserSession  # noqa: F401
from ponto.models.campaign import Campaign  # noqa: F401
from ponto.models.reward import Reward  # noqa: F401
