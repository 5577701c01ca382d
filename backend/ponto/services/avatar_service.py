"""
Serviço de upload de avatar.

Aceita o conteúdo bruto (multipart) ou uma string base64, com ou sem prefixo
data URL. O tipo é validado pelo tipo declarado E pelos bytes iniciais do arquivo.
"""

import base64
import binascii
import logging
import re
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ponto.config import settings
from ponto.exceptions import InvalidInputError
from ponto.services.user_service import get_user

logger = logging.getLogger(__name__)

MIME_TO_EXTENSION = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
}

DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.*)$", re.DOTALL)


def detect_image_extension(content: bytes) -> Optional[str]:
    """Identifica png, jpg, gif ou webp pelos bytes mágicos ; None se desconhecido."""
    if content.startswith(b"\x89PNG\r\n\x1a\n"):
        return "png"
    if content.startswith(b"\xff\xd8\xff"):
        return "jpg"
    if content[:6] in (b"GIF87a", b"GIF89a"):
        return "gif"
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "webp"
    return None


def decode_base64_image(value: str) -> tuple[bytes, Optional[str]]:
    """Decodifica 'data:image/png;base64,...' ou base64 puro. Retorna (bytes, mime declarado)."""
    value = value.strip()
    declared_type = None
    match = DATA_URL_PATTERN.match(value)
    if match:
        declared_type = match.group("mime").lower()
        value = match.group("data")

    try:
        content = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError("Imagem base64 inválida.") from exc
    return content, declared_type


def max_avatar_bytes() -> int:
    return settings.MAX_AVATAR_SIZE_MB * 1024 * 1024


def avatar_too_large() -> InvalidInputError:
    return InvalidInputError(f"Imagem muito grande. Tamanho máximo : {settings.MAX_AVATAR_SIZE_MB} MB.")


def user_avatar_url(filename: str) -> str:
    return f"{settings.AVATAR_URL_PREFIX.rstrip('/')}/{filename}"


def save_avatar(db: Session, user_id: str, content: bytes, declared_type: Optional[str] = None) -> str:
    """
    Grava o avatar em AVATAR_DIR/<usuario_id>.<ext> e atualiza a referência do usuário.

    Levanta InvalidInputError para arquivo vazio, grande demais, de tipo não
    suportado ou cujo conteúdo não corresponde ao tipo declarado.
    Retorna a URL pública do avatar.
    """
    if not content:
        raise InvalidInputError("Nenhuma imagem enviada.")
    if len(content) > max_avatar_bytes():
        raise avatar_too_large()

    extension = detect_image_extension(content)
    if extension is None:
        raise InvalidInputError("Formato de imagem não suportado. Use PNG, JPEG, GIF ou WEBP.")
    if declared_type is not None and MIME_TO_EXTENSION.get(declared_type.lower()) != extension:
        raise InvalidInputError("O conteúdo da imagem não corresponde ao tipo informado.")

    user = get_user(db, user_id)
    previous_avatar = user.avatar

    avatar_dir = Path(settings.AVATAR_DIR)
    avatar_dir.mkdir(parents=True, exist_ok=True)
    filename = f"{user_id}.{extension}"
    new_path = avatar_dir / filename
    stale = [p for p in avatar_dir.glob(f"{user_id}.*") if p.name != filename]
    new_path.write_bytes(content)

    user.avatar = user_avatar_url(filename)
    try:
        db.commit()
    except SQLAlchemyError:
        # O usuário continua apontando para o avatar anterior, que ainda existe.
        db.rollback()
        if previous_avatar != user_avatar_url(filename):
            new_path.unlink(missing_ok=True)
        raise

    for previous in stale:
        previous.unlink(missing_ok=True)

    logger.info("Avatar atualizado : %s (%s, %d bytes)", user_id, extension, len(content))
    return user.avatar
