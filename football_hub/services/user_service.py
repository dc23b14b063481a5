"""Service de Usuário (Async)"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from football_hub.core.exceptions import ConflictError, UnauthorizedError
from football_hub.core.security import create_access_token, hash_password, verify_password
from football_hub.models.user import ROLE_USER, User
from football_hub.repositories.user_repository import UserRepository
from football_hub.schemas.user import UserRegister
import logging

logger = logging.getLogger(__name__)


class UserService:
    """Cadastro e login"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = UserRepository(db)

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        return await self.repository.get_by_id(user_id)

    async def register(self, data: UserRegister) -> User:
        """Cria usuário comum com senha em hash bcrypt"""
        if await self.repository.get_by_email(data.email):
            raise ConflictError("Email is already registered")
        try:
            user = await self.repository.create({
                "email": data.email.lower(),
                "password": hash_password(data.password),
                "fullname": data.fullname,
                "role": ROLE_USER,
            })
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Email is already registered")
        logger.info(f"Usuário registrado: {user.id}")
        return user

    async def login(self, email: str, password: str) -> str:
        """Valida credenciais e devolve o JWT de acesso"""
        user = await self.repository.get_by_email(email)
        if not user or not verify_password(password, user.password):
            raise UnauthorizedError("Invalid credentials")
        return create_access_token({"id": user.id, "email": user.email, "role": user.role})
