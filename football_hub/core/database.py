"""Configuração do banco de dados async"""
from typing import AsyncIterator
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from football_hub.core.config import settings
import logging

logger = logging.getLogger(__name__)

# Base para modelos SQLAlchemy
Base = declarative_base()


def build_engine(url: str, **overrides) -> AsyncEngine:
    """Cria engine async; pool dimensionado só para Postgres"""
    options = {
        "pool_pre_ping": True,
        "echo": settings.DEBUG,
    }
    if url.startswith("postgresql") and "poolclass" not in overrides:
        options.update(pool_size=20, max_overflow=10, pool_recycle=3600)
    options.update(overrides)
    return create_async_engine(url, **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    """Session factory async ligada a uma engine"""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine(settings.database_url)

# Session factory async
AsyncSessionLocal = build_session_factory(engine)


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Dependency async para obter sessão do banco de dados.
    Uso: db: AsyncSession = Depends(get_db)
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_session_factory() -> async_sessionmaker:
    """
    Dependency que entrega a factory de sessões.
    Usada pela sincronização em lote, onde cada registro abre sua própria sessão.
    """
    return AsyncSessionLocal


async def init_db():
    """Inicializa o banco de dados criando todas as tabelas"""
    from football_hub import models  # noqa: F401
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Banco de dados inicializado")


async def close_db():
    """Fecha todas as conexões do banco"""
    await engine.dispose()
    logger.info("Conexões do banco de dados fechadas")
