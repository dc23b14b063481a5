"""Aplicação principal FastAPI"""
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from fastapi.responses import JSONResponse
from sqlalchemy import select, func, text
from sqlalchemy.ext.asyncio import AsyncSession
from football_hub.api.v1.api import api_router
from football_hub.core.cache import cache
from football_hub.core.config import settings
from football_hub.core.database import AsyncSessionLocal, close_db, get_db, init_db
from football_hub.core.exceptions import register_exception_handlers
from football_hub.core.limiter import limiter
from football_hub.core.logging_config import setup_logging
from football_hub.core.middleware import RequestContextMiddleware
from football_hub.models.league import League
import logging

# Configura logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup e shutdown"""
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} iniciando...")
    try:
        await init_db()
        async with AsyncSessionLocal() as db:
            leagues_count = (await db.execute(select(func.count(League.id)))).scalar() or 0
        if leagues_count == 0:
            logger.warning("⚠️  Nenhuma liga no banco. Use POST /api/v1/leagues/sync para começar")
        else:
            logger.info(f"✅ Banco OK: {leagues_count} ligas encontradas")
    except Exception as e:
        logger.warning(f"Erro ao verificar banco: {e}")

    yield

    logger.info("Aplicação encerrando...")
    await cache.close()
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="API REST de ligas, times, jogadores e partidas de futebol com textos gerados por IA",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Estado do limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app)

# Middlewares
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestContextMiddleware)

# Inclui routers
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    """Endpoint raiz"""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "endpoints": {
            "leagues": f"{settings.API_V1_PREFIX}/leagues",
            "teams": f"{settings.API_V1_PREFIX}/teams",
            "players": f"{settings.API_V1_PREFIX}/players",
            "matches": f"{settings.API_V1_PREFIX}/matches",
            "favorites": f"{settings.API_V1_PREFIX}/favorites",
        }
    }


@app.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Health check: banco obrigatório, Redis opcional"""
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    except Exception as e:
        logger.error(f"Health check: banco indisponível: {e}")
        database = "unavailable"

    cache_status = "disabled"
    if cache.enabled:
        cache_status = "ok" if await cache.ping() else "unavailable"

    healthy = database == "ok"
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "version": settings.APP_VERSION,
            "database": database,
            "cache": cache_status,
        },
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "football_hub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
