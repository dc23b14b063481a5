"""Hash de senhas (bcrypt) e tokens de acesso (JWT)"""
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import bcrypt
import jwt
from football_hub.core.config import settings

# bcrypt só aceita até 72 bytes
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Gera hash bcrypt da senha"""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Compara senha em texto com o hash salvo"""
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Hash salvo em formato inválido
        return False


def create_access_token(payload: dict[str, Any], expires_minutes: Optional[int] = None) -> str:
    """Assina um JWT com expiração"""
    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(minutes=expires_minutes or settings.JWT_EXPIRE_MINUTES)
    claims = {**payload, "iat": now, "exp": expires_at}
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict[str, Any]]:
    """Valida o token; None se inválido ou expirado"""
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None
