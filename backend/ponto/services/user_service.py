"""
Serviço de usuários : cadastro, autenticação, perfil e troca de senha.
"""

import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ponto.auth.passwords import hash_password, verify_password
from ponto.config import settings
from ponto.exceptions import AuthError, ConflictError, NotFoundError
from ponto.models.user import ROLE_ADMIN, ROLE_COLABORADOR, User
from ponto.schemas.user import RegisterRequest, UserProfile, normalize_email

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Credenciais inválidas."


def register_user(db: Session, data: RegisterRequest, role: str = ROLE_COLABORADOR) -> User:
    """
    Cadastra um novo usuário com saldo 0, avatar padrão e senha em hash bcrypt.

    Levanta ConflictError se o email ou a matrícula já estiverem cadastrados ;
    a restrição UNIQUE do banco é a garantia final (corrida entre dois cadastros).
    """
    _ensure_identifier_available(db, data.email, data.matricula)

    user = User(
        nome=data.nome,
        email=data.email,
        matricula=data.matricula,
        senha_hash=hash_password(data.senha),
        avatar=settings.DEFAULT_AVATAR,
        moedas=0,
        papel=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError("Este email ou matrícula já está cadastrado.") from exc
    db.refresh(user)

    logger.info("Usuário cadastrado : %s (papel=%s)", user.id, user.papel)
    return user


def _ensure_identifier_available(db: Session, email: Optional[str], matricula: Optional[str]) -> None:
    if email is not None:
        exists = db.execute(select(User.id).where(User.email == email)).scalar()
        if exists:
            raise ConflictError("Este email já está cadastrado.")
    if matricula is not None:
        exists = db.execute(select(User.id).where(User.matricula == matricula)).scalar()
        if exists:
            raise ConflictError("Esta matrícula já está cadastrada.")


def authenticate(db: Session, senha: str, email: Optional[str] = None, matricula: Optional[str] = None) -> User:
    """
    Busca o usuário pelo identificador e confere a senha.

    Identificador inexistente e senha errada produzem o mesmo AuthError,
    para não revelar qual dos dois falhou.
    """
    if email is not None:
        user = db.execute(select(User).where(User.email == email)).scalar()
    else:
        user = db.execute(select(User).where(User.matricula == matricula)).scalar()

    if user is None or not verify_password(senha, user.senha_hash):
        logger.warning("Falha de login para o identificador %s", email or matricula)
        raise AuthError(INVALID_CREDENTIALS)
    return user


def get_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("Usuário não encontrado.")
    return user


def change_password(db: Session, user_id: str, current_password: str, new_password: str) -> None:
    """Troca a senha após conferir a atual. Levanta AuthError se a senha atual não confere."""
    user = get_user(db, user_id)
    if not verify_password(current_password, user.senha_hash):
        raise AuthError("Senha atual incorreta.")
    user.senha_hash = hash_password(new_password)
    db.commit()
    logger.info("Senha alterada : %s", user_id)


def ensure_admin(db: Session, nome: str, email: str, senha: str) -> Optional[User]:
    """Cria o administrador inicial se ainda não houver admin nem usuário com este email."""
    email = normalize_email(email)
    existing = db.execute(
        select(User).where(or_(User.email == email, User.papel == ROLE_ADMIN))
    ).scalars().first()
    if existing is not None:
        return None
    admin = register_user(db, RegisterRequest(nome=nome, email=email, senha=senha), role=ROLE_ADMIN)
    logger.info("Administrador inicial criado : %s", admin.id)
    return admin


def to_profile(user: User) -> UserProfile:
    return UserProfile(
        id=user.id,
        nome=user.nome,
        email=user.email,
        matricula=user.matricula,
        avatar=user.avatar,
        bip=user.moedas,
        papel=user.papel,
    )
