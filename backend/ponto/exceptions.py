"""
Taxonomia de erros da aplicação.

Os serviços levantam estas exceções; os handlers registrados em main.py as
convertem no envelope JSON {"status": "erro", "mensagem": ...} com o código HTTP
correspondente.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Erro interno do servidor."

    def __init__(self, mensagem: str | None = None):
        self.mensagem = mensagem or self.default_message
        super().__init__(self.mensagem)


class InvalidInputError(AppError):
    status_code = 400
    default_message = "Dados inválidos."


class AuthError(AppError):
    status_code = 401
    default_message = "Não autenticado."


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Acesso negado."


class NotFoundError(AppError):
    status_code = 404
    default_message = "Registro não encontrado."


class ConflictError(AppError):
    status_code = 409
    default_message = "Registro duplicado."


class InternalError(AppError):
    status_code = 500
