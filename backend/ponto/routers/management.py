"""
Router de gestão : listar, criar e remover gestores.
Listar e remover exigem papel gestor ou admin ; criar exige admin.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ponto.auth.dependencies import require_role
from ponto.database import get_db
from ponto.exceptions import InternalError
from ponto.models.session import UserSession
from ponto.models.user import ROLE_ADMIN, ROLE_GESTOR
from ponto.schemas.management import ManagerListResponse, ManagerRemovedResponse
from ponto.schemas.user import RegisterRequest, RegisterResponse
from ponto.services import management_service, user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gestao", tags=["Gestão"])


@router.get("/gestores", response_model=ManagerListResponse, summary="Listar gestores")
def list_managers(
    user_session: UserSession = Depends(require_role(ROLE_GESTOR)),
    db: Session = Depends(get_db),
):
    try:
        managers = management_service.list_managers(db)
    except SQLAlchemyError as exc:
        logger.exception("Erro ao listar gestores")
        raise InternalError("Erro ao listar gestores.") from exc
    return ManagerListResponse(gestores=[user_service.to_profile(m) for m in managers])


@router.post("/gestores", response_model=RegisterResponse, status_code=201, summary="Criar gestor")
def create_manager(
    data: RegisterRequest,
    user_session: UserSession = Depends(require_role(ROLE_ADMIN)),
    db: Session = Depends(get_db),
):
    """Cria uma conta com papel gestor. Mesmas regras do cadastro comum."""
    try:
        manager = management_service.create_manager(db, data)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Erro ao criar gestor")
        raise InternalError("Erro ao criar gestor.") from exc
    return RegisterResponse(mensagem="Gestor cadastrado com sucesso!", usuario_id=manager.id)


@router.delete("/gestores/{usuario_id}", response_model=ManagerRemovedResponse, summary="Remover gestor")
def delete_manager(
    usuario_id: str,
    user_session: UserSession = Depends(require_role(ROLE_GESTOR)),
    db: Session = Depends(get_db),
):
    """Remove definitivamente um gestor, junto com suas sessões e pontos. 404 se não for gestor."""
    try:
        management_service.delete_manager(db, usuario_id)
    except SQLAlchemyError as exc:
        logger.exception("Erro ao remover gestor %s", usuario_id)
        raise InternalError("Erro ao remover gestor.") from exc
    logger.info("Gestor %s removido por %s", usuario_id, user_session.usuario_id)
    return ManagerRemovedResponse(mensagem="Gestor removido com sucesso.", usuario_id=usuario_id)
