"""Dependências de autenticação das rotas"""
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from football_hub.core.database import get_db
from football_hub.core.exceptions import ForbiddenError, UnauthorizedError
from football_hub.core.security import decode_access_token
from football_hub.models.user import User
from football_hub.repositories.user_repository import UserRepository

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """Usuário do token Bearer; 401 se ausente, inválido ou de usuário inexistente"""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication required")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedError("Invalid authentication token")

    user_id = payload.get("id")
    if not isinstance(user_id, int):
        raise UnauthorizedError("Invalid token payload")

    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Restringe a rota a administradores"""
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user
