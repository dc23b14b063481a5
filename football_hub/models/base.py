"""Modelo base para todos os models"""
from sqlalchemy import Column, Integer, DateTime, func
from football_hub.core.database import Base


class BaseModel(Base):
    """Classe base abstrata para todos os modelos"""
    __abstract__ = True
    # Busca created_at/updated_at gerados no banco logo após INSERT/UPDATE
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
