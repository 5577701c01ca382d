"""
Configuração compartilhada por todos os testes.

- `client` : TestClient com get_db mockado (contratos das rotas, serviços patchados)
- `db` / `api` : banco SQLite real num arquivo temporário por teste
"""

import os
import tempfile

# Antes de importar a aplicação : banco, avatares e bcrypt isolados para os testes.
_TMP_DIR = tempfile.mkdtemp(prefix="ponto-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR}/app.db"
os.environ["AVATAR_DIR"] = os.path.join(_TMP_DIR, "avatars")
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["MOEDAS_POR_PONTO"] = "5"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("ADMIN_SENHA", None)

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from ponto.database import build_engine, build_session_factory, get_db, init_db  # noqa: E402
from ponto.main import app  # noqa: E402
from ponto.models.user import ROLE_COLABORADOR  # noqa: E402
from ponto.schemas.user import RegisterRequest  # noqa: E402
from ponto.services import user_service  # noqa: E402

DEFAULT_PASSWORD = "segredo123"


@pytest.fixture
def client():
    """Cliente HTTP de teste com o banco mockado."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'ponto_test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def api(session_factory):
    """Cliente HTTP de teste ligado ao banco SQLite temporário."""

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_user(db, nome="Ana", email=None, matricula=None, senha=DEFAULT_PASSWORD, papel=ROLE_COLABORADOR):
    """Cadastra um usuário diretamente pelo serviço."""
    if email is None and matricula is None:
        email = f"{nome.lower().replace(' ', '.')}@empresa.com"
    data = RegisterRequest(nome=nome, email=email, matricula=matricula, senha=senha)
    return user_service.register_user(db, data, role=papel)


def login(api, senha=DEFAULT_PASSWORD, **identifier):
    """Faz login pela API ; o TestClient guarda o cookie de sessão."""
    response = api.post("/api/login", json={"senha": senha, **identifier})
    assert response.status_code == 200, response.text
    return response
