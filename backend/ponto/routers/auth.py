"""
Router de autenticação : cadastro, login, logout e troca de senha.
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ponto.auth import jwt_handler
from ponto.auth.dependencies import get_current_session, get_optional_session, get_session_store
from ponto.auth.sessions import SessionStore
from ponto.config import settings
from ponto.database import get_db
from ponto.exceptions import InternalError
from ponto.models.session import UserSession
from ponto.schemas.user import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    StatusResponse,
)
from ponto.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Autenticação"])


@router.post("/cadastrar", response_model=RegisterResponse, status_code=201,
             summary="Cadastrar um usuário")
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Cadastra um colaborador com saldo 0 e avatar padrão.
    Exige nome, senha e email ou matrícula. Email/matrícula duplicado → 409.
    """
    try:
        user = user_service.register_user(db, data)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Erro ao cadastrar usuário")
        raise InternalError("Erro ao cadastrar usuário.") from exc
    return RegisterResponse(mensagem="Usuário cadastrado com sucesso!", usuario_id=user.id)


@router.post("/login", response_model=LoginResponse, summary="Login por email ou matrícula")
def login(
    data: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    """
    Confere as credenciais, cria a sessão no servidor e grava o cookie http-only.
    O perfil também é devolvido no corpo, para clientes que não usam o cookie.
    """
    try:
        user = user_service.authenticate(db, data.senha, email=data.email, matricula=data.matricula)
        user_session = store.create(user.id, user.papel)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Erro no login")
        raise InternalError("Erro interno do servidor.") from exc

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=jwt_handler.create_session_cookie(user_session.token, user.id),
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return LoginResponse(mensagem="Login bem-sucedido!", usuario=user_service.to_profile(user))


@router.post("/logout", response_model=StatusResponse, summary="Encerrar a sessão")
def logout(
    response: Response,
    user_session: UserSession | None = Depends(get_optional_session),
    store: SessionStore = Depends(get_session_store),
):
    """Destrói a sessão do servidor (se houver) e apaga o cookie."""
    if user_session is not None:
        try:
            store.destroy(user_session.token)
        except SQLAlchemyError as exc:
            logger.exception("Erro ao encerrar sessão")
            raise InternalError("Erro ao encerrar a sessão.") from exc
    response.delete_cookie(settings.SESSION_COOKIE_NAME, httponly=True, samesite="lax")
    return StatusResponse(mensagem="Logout realizado com sucesso.")


@router.post("/alterar-senha", response_model=StatusResponse, summary="Trocar a própria senha")
def change_password(
    data: ChangePasswordRequest,
    user_session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    """Troca a senha do usuário logado. As demais sessões dele são encerradas."""
    try:
        user_service.change_password(db, user_session.usuario_id, data.senha_atual, data.nova_senha)
        store.destroy_for_user(user_session.usuario_id, keep=user_session.token)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Erro ao alterar senha")
        raise InternalError("Erro ao alterar a senha.") from exc
    return StatusResponse(mensagem="Senha alterada com sucesso.")
