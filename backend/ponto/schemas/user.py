"""
Schemas Pydantic para cadastro, login e perfil de usuário.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator, model_validator


def normalize_email(email: Optional[str]) -> Optional[str]:
    """Forma canônica do email : sem espaços nas pontas e em minúsculas."""
    if email is None:
        return None
    return email.strip().lower() or None


class RegisterRequest(BaseModel):
    """Cadastro (POST /api/cadastrar). Exige email ou matrícula como identificador."""
    nome: str
    email: Optional[EmailStr] = None
    matricula: Optional[str] = None
    senha: str

    @field_validator("nome")
    @classmethod
    def nome_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Dados incompletos: nome e senha são obrigatórios.")
        return v.strip()

    @field_validator("senha")
    @classmethod
    def senha_not_empty(cls, v: str) -> str:
        # A senha não é normalizada : espaços fazem parte do segredo.
        if not v.strip():
            raise ValueError("Dados incompletos: nome e senha são obrigatórios.")
        return v

    @field_validator("matricula")
    @classmethod
    def matricula_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("email", mode="before")
    @classmethod
    def email_blank_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: Optional[str]) -> Optional[str]:
        # O email é comparado em minúsculas no cadastro, no login e na checagem de duplicidade.
        return normalize_email(v)

    @model_validator(mode="after")
    def identifier_required(self) -> "RegisterRequest":
        if self.email is None and self.matricula is None:
            raise ValueError("Dados incompletos: informe email ou matrícula.")
        return self


class LoginRequest(BaseModel):
    """Login (POST /api/login) por email ou matrícula."""
    email: Optional[str] = None
    matricula: Optional[str] = None
    senha: str

    @field_validator("email", "matricula")
    @classmethod
    def strip_identifier(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: Optional[str]) -> Optional[str]:
        return normalize_email(v)

    @field_validator("senha")
    @classmethod
    def senha_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Email/matrícula e senha são obrigatórios.")
        return v

    @model_validator(mode="after")
    def identifier_required(self) -> "LoginRequest":
        if self.email is None and self.matricula is None:
            raise ValueError("Email/matrícula e senha são obrigatórios.")
        return self


class ChangePasswordRequest(BaseModel):
    senha_atual: str
    nova_senha: str

    @field_validator("nova_senha")
    @classmethod
    def nova_senha_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("A nova senha não pode ser vazia.")
        return v


class UserProfile(BaseModel):
    """Perfil público do usuário ; bip é o saldo de moedas."""
    id: str
    nome: str
    email: Optional[str]
    matricula: Optional[str]
    avatar: str
    bip: int
    papel: str


class RegisterResponse(BaseModel):
    status: str = "sucesso"
    mensagem: str
    usuario_id: str


class LoginResponse(BaseModel):
    status: str = "sucesso"
    mensagem: str
    usuario: UserProfile


class ProfileResponse(BaseModel):
    status: str = "sucesso"
    usuario: UserProfile


class StatusResponse(BaseModel):
    status: str = "sucesso"
    mensagem: str


class AvatarResponse(BaseModel):
    status: str = "sucesso"
    avatarUrl: str
