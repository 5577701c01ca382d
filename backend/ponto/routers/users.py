"""
Router de perfil : usuário logado e upload de avatar.
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ponto.auth.dependencies import get_current_session
from ponto.database import get_db
from ponto.exceptions import InternalError, InvalidInputError
from ponto.models.session import UserSession
from ponto.schemas.user import AvatarResponse, ProfileResponse
from ponto.services import avatar_service, user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Usuários"])

GENERIC_UPLOAD_TYPES = {"application/octet-stream", ""}


@router.get("/usuario-logado", response_model=ProfileResponse, summary="Perfil da sessão atual")
def get_session_profile(
    user_session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Retorna o perfil do usuário dono do cookie de sessão."""
    return _profile(db, user_session.usuario_id)


@router.get("/usuario-logado/{usuario_id}", response_model=ProfileResponse, summary="Perfil de um usuário")
def get_profile(usuario_id: str, db: Session = Depends(get_db)):
    return _profile(db, usuario_id)


def _profile(db: Session, usuario_id: str) -> ProfileResponse:
    try:
        user = user_service.get_user(db, usuario_id)
    except SQLAlchemyError as exc:
        logger.exception("Erro ao buscar usuário %s", usuario_id)
        raise InternalError("Erro ao buscar usuário.") from exc
    return ProfileResponse(usuario=user_service.to_profile(user))


@router.post("/upload-avatar", response_model=AvatarResponse, summary="Enviar avatar")
async def upload_avatar(
    request: Request,
    user_session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Atualiza o avatar do usuário logado.

    Formatos aceitos :
    - multipart/form-data com o arquivo no campo `avatar`
    - JSON `{"imagem": "data:image/png;base64,..."}` (base64 puro também é aceito)

    Tipos suportados : PNG, JPEG, GIF, WEBP.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("multipart/form-data"):
        form = await request.form()
        upload = form.get("avatar")
        if upload is None or isinstance(upload, str):
            raise InvalidInputError("Envie a imagem no campo 'avatar'.")
        limit = avatar_service.max_avatar_bytes()
        if upload.size is not None and upload.size > limit:
            raise avatar_service.avatar_too_large()
        # No máximo limit + 1 bytes em memória ; save_avatar rejeita o excedente.
        content = await upload.read(limit + 1)
        declared_type = upload.content_type
        if declared_type in GENERIC_UPLOAD_TYPES:
            declared_type = None
    elif content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as exc:
            raise InvalidInputError("JSON inválido.") from exc
        imagem = body.get("imagem") if isinstance(body, dict) else None
        if not isinstance(imagem, str) or not imagem.strip():
            raise InvalidInputError("Envie a imagem em base64 no campo 'imagem'.")
        content, declared_type = avatar_service.decode_base64_image(imagem)
    else:
        raise InvalidInputError("Formato inválido. Envie multipart/form-data ou JSON com base64.")

    try:
        avatar_url = avatar_service.save_avatar(db, user_session.usuario_id, content, declared_type)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Erro ao salvar avatar do usuário %s", user_session.usuario_id)
        raise InternalError("Erro ao salvar avatar.") from exc
    except OSError as exc:
        logger.exception("Erro ao gravar arquivo de avatar do usuário %s", user_session.usuario_id)
        raise InternalError("Erro ao salvar avatar.") from exc
    return AvatarResponse(avatarUrl=avatar_url)
