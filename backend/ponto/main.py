"""
Ponto de entrada da API de ponto gamificado.
Inicialização : uvicorn ponto.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from ponto.config import settings
from ponto.database import SessionLocal, init_db
from ponto.exceptions import AppError
from ponto.routers import auth, campaigns, management, points, ranking, rewards, users
from ponto.scheduler import start_scheduler, stop_scheduler
from ponto.services import user_service

logger = logging.getLogger(__name__)


def _bootstrap_admin() -> None:
    """Cria o administrador inicial quando ADMIN_EMAIL e ADMIN_SENHA estão configurados."""
    if not (settings.ADMIN_EMAIL and settings.ADMIN_SENHA):
        return
    db = SessionLocal()
    try:
        user_service.ensure_admin(db, settings.ADMIN_NOME, settings.ADMIN_EMAIL, settings.ADMIN_SENHA)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Ciclo de vida : cria as tabelas, o admin inicial e controla o scheduler."""
    init_db()
    _bootstrap_admin()
    if settings.SCHEDULER_ENABLED:
        start_scheduler()
    yield
    stop_scheduler()


app = FastAPI(
    title="Ponto Gamificado API",
    description="API de registro de ponto com moedas (bip) e ranking",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS: cookies de sessão exigem allow_credentials e origens explícitas (regex).
app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)

Path(settings.AVATAR_DIR).mkdir(parents=True, exist_ok=True)
app.mount(settings.AVATAR_URL_PREFIX, StaticFiles(directory=settings.AVATAR_DIR), name="avatars")

app.include_router(auth.router)
app.include_router(points.router)
app.include_router(ranking.router)
app.include_router(users.router)
app.include_router(management.router)
app.include_router(campaigns.router)
app.include_router(rewards.router)


def _error(status_code: int, mensagem: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "erro", "mensagem": mensagem})


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error(exc.status_code, exc.mensagem)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corpo ausente ou malformado → 400 com a primeira mensagem de validação."""
    return _error(400, _validation_message(exc.errors()))


def _validation_message(errors) -> str:
    if not errors:
        return "Dados inválidos."
    first = errors[0]
    if first.get("type") == "missing":
        field = (first.get("loc") or ("campo",))[-1]
        return f"Dados incompletos: o campo '{field}' é obrigatório."
    message = str(first.get("msg", "Dados inválidos."))
    return message.removeprefix("Value error, ")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepta as exceções não tratadas para que a resposta 500 use o mesmo
    envelope JSON e passe pelo CORSMiddleware.
    """
    logger.error("Exceção não tratada : %s", exc, exc_info=True)
    return _error(500, "Erro interno do servidor.")


@app.get("/api/health", tags=["Saúde"])
def health_check():
    """Verifica se a API está operacional."""
    return {"status": "ok", "service": "Ponto Gamificado API", "version": "0.1.0"}
