"""
Configuração da conexão com o banco SQLite.

O engine é construído a partir de DATABASE_URL e compartilhado pelo processo;
cada requisição recebe sua própria Session via a dependência get_db.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from ponto.config import settings

Base = declarative_base()


def _set_sqlite_pragmas(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA busy_timeout=5000;")
    cursor.execute("PRAGMA foreign_keys=ON;")
    cursor.execute("PRAGMA journal_mode=WAL;")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """Cria o engine; para SQLite libera o uso entre threads e aplica os PRAGMAs."""
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
        event.listen(engine, "connect", _set_sqlite_pragmas)
        return engine
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = build_session_factory(engine)


def init_db(bind: Engine = engine) -> None:
    """Cria as tabelas ausentes. Importa os modelos para registrá-los em Base.metadata."""
    import ponto.models  # noqa: F401

    Base.metadata.create_all(bind=bind)


def get_db():
    """Dependência FastAPI: fornece uma sessão de banco e a fecha após o uso."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
