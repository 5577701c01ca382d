"""
Hash de senhas com bcrypt. A senha em texto puro nunca é armazenada nem registrada em log.
"""

import bcrypt

from ponto.config import settings


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Comparação em tempo constante (bcrypt.checkpw). Hash malformado conta como senha errada."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
