"""Endpoints de Usuários"""
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from football_hub.api.deps import get_current_user
from football_hub.core.database import get_db
from football_hub.core.exceptions import ForbiddenError, NotFoundError
from football_hub.core.responses import success_response
from football_hub.models.user import User
from football_hub.schemas.common import ApiResponse
from football_hub.schemas.user import TokenResponse, UserLogin, UserRegister, UserResponse
from football_hub.services.user_service import UserService

router = APIRouter()


@router.post("/register", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def register(payload: UserRegister, db: AsyncSession = Depends(get_db)):
    """Cadastro de usuário comum"""
    user = await UserService(db).register(payload)
    return success_response(user, "User registered successfully")


@router.post("/login", response_model=ApiResponse[TokenResponse])
async def login(payload: UserLogin, db: AsyncSession = Depends(get_db)):
    """Login; devolve o access_token"""
    token = await UserService(db).login(payload.email, payload.password)
    return success_response({"access_token": token}, "Login successful")


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(
    user_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Perfil do usuário; cada um só vê o próprio (admins veem todos)"""
    if current_user.id != user_id and not current_user.is_admin:
        raise ForbiddenError("You are not allowed to access this user")
    user = await UserService(db).get_user_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")
    return success_response(user, "User retrieved successfully")
