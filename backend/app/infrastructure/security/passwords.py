"""
Password hashing (bcrypt via passlib).
"""

from typing import Optional

from passlib.context import CryptContext


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: Optional[str]) -> bool:
    """Check a password; accounts without a stored hash never match."""
    if not hashed_password:
        return False
    return pwd_context.verify(password, hashed_password)
