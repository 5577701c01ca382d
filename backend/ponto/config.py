"""
Configuração central da aplicação via variáveis de ambiente.
Carregada a partir de um arquivo .env em desenvolvimento.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Banco de dados (SQLite embarcado, um arquivo por instalação)
    DATABASE_URL: str = "sqlite:///./ponto_gamificacao.db"

    # Sessão: o cookie carrega um JWT assinado que referencia a sessão no servidor
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    SESSION_EXPIRE_MINUTES: int = 480
    SESSION_COOKIE_NAME: str = "ponto_sessao"
    SESSION_COOKIE_SECURE: bool = False
    SESSION_PURGE_INTERVAL_MINUTES: int = 60
    SCHEDULER_ENABLED: bool = True
    BCRYPT_ROUNDS: int = 12

    # Gamificação
    MOEDAS_POR_PONTO: int = 5

    # Avatares
    AVATAR_DIR: str = "./avatars"
    AVATAR_URL_PREFIX: str = "/avatars"
    DEFAULT_AVATAR: str = "/avatars/default.png"
    MAX_AVATAR_SIZE_MB: int = 2

    # CORS: qualquer porta localhost em desenvolvimento
    CORS_ORIGIN_REGEX: str = r"https?://(localhost|127\.0\.0\.1)(:\d+)?"

    # Administrador inicial (criado no startup se ainda não existir)
    ADMIN_NOME: str = "Administrador"
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_SENHA: Optional[str] = None

    # Ambiente
    ENV: str = "development"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
