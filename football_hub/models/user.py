"""Modelo User"""
from sqlalchemy import Column, String
from football_hub.models.base import BaseModel

ROLE_ADMIN = "admin"
ROLE_USER = "user"


class User(BaseModel):
    """Modelo de Usuário"""
    __tablename__ = "users"

    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)  # hash bcrypt
    fullname = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default=ROLE_USER)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
