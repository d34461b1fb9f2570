"""
Password hashing and verification.

Uses bcrypt for password hashing with a per-password random salt
and configurable work factor.  bcrypt only reads the first 72 bytes of
its input, so passwords are first reduced to a fixed-size SHA-256 digest
(base64, 44 bytes); every password length and encoding hashes in full.
"""

from __future__ import annotations

import base64
import hashlib
from typing import Optional

import bcrypt

from config.settings import config


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode()).digest())


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt (auto-salted, work factor from settings)."""
    salt = bcrypt.gensalt(rounds=rounds or config.bcrypt_rounds)
    return bcrypt.hashpw(_prehash(password), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode())
    except (ValueError, TypeError):
        return False
