# app/security.py

from typing import Optional

import bcrypt

from app.settings import SETTINGS


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Salted bcrypt hash of a plaintext password, cost factor from settings.
    """
    salt = bcrypt.gensalt(rounds=rounds or SETTINGS.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
