# users_api/app/security/hashing.py
"""
Password hashing.

Passwords are stored as salted PBKDF2-SHA256 hashes; verification goes
through passlib, which compares digests in constant time.
"""
from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # malformed or unknown hash format
        return False
