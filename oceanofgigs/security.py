"""
Password hashing for stored user records.

Signup and profile updates run the submitted password through ``hash_password``;
the plain value is never stored and the hash never leaves the API.
"""
from __future__ import annotations

from passlib.context import CryptContext

from .config import settings

pwd_context = CryptContext(schemes=[settings.PASSWORD_HASH_SCHEME], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """True when ``plain_password`` matches a hash produced by ``hash_password``."""
    return pwd_context.verify(plain_password, hashed_password)
