"""
Configurações da aplicação.

Lidas do ambiente (nomes exatos, sensível a maiúsculas) e de um .env
opcional. Use a instância `settings`.
"""
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from functools import cached_property

DEV_JWT_SECRET = "dev-secret-key-change-in-production"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App
    APP_NAME: str = "Football Hub API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, test ou production
    API_V1_PREFIX: str = "/api/v1"
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # PostgreSQL: DATABASE_URL completa ou as partes DB_*
    DATABASE_URL: Optional[str] = None
    DB_USER: Optional[str] = None
    DB_PASSWORD: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "football_hub"

    # Redis (cache da classificação e broker padrão do Celery)
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: Optional[str] = None
    CACHE_TTL: int = 120
    CACHE_ENABLED: bool = True
    CELERY_BROKER_URL: Optional[str] = None
    CELERY_RESULT_BACKEND: Optional[str] = None

    # Provedor de dados de futebol (apifootball)
    FOOTBALL_API_KEY: str = ""
    FOOTBALL_API_BASE_URL: str = "https://apiv3.apifootball.com"
    PROVIDER_TIMEOUT: int = 30
    PROVIDER_MAX_RETRIES: int = 3
    PROVIDER_MIN_INTERVAL: float = 0.5  # 2 req/s

    # Temporada sincronizada e janela de datas das partidas
    SYNC_SEASON: str = "2025/2026"
    SYNC_MATCHES_FROM: str = "2025-08-01"
    SYNC_MATCHES_TO: str = "2026-06-30"
    SYNC_MAX_CONCURRENCY: int = 10
    SYNC_RECORD_TIMEOUT: float = 30.0

    MAX_PAGE_SIZE: int = 50

    # IA generativa (DeepSeek com fallback para OpenAI)
    OPENAI_API_KEY: Optional[str] = None
    DEEPSEEK_API_KEY: Optional[str] = None
    DEEPSEEK_BASE_URL: str = "https://api.deepseek.com/v1"
    AI_MODEL: str = "deepseek-chat"
    AI_TEMPERATURE: float = 0.7
    AI_LAZY_GENERATION: bool = True

    # Auth
    JWT_SECRET: str = DEV_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60 * 24

    RATE_LIMIT_ENABLED: bool = True

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"
    LOG_TO_FILE: bool = True

    @model_validator(mode="after")
    def _require_real_secret_in_production(self):
        if self.is_production and self.JWT_SECRET == DEV_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set in production")
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @cached_property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @cached_property
    def database_url(self) -> str:
        """URL async do banco; postgresql:// vira postgresql+asyncpg://"""
        if self.DATABASE_URL:
            if self.DATABASE_URL.startswith("postgresql://"):
                return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @cached_property
    def redis_url(self) -> str:
        password = f":{self.REDIS_PASSWORD}@" if self.REDIS_PASSWORD else ""
        return f"redis://{password}{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    @cached_property
    def celery_broker_url(self) -> str:
        return self.CELERY_BROKER_URL or self.redis_url

    @cached_property
    def celery_result_backend(self) -> str:
        return self.CELERY_RESULT_BACKEND or self.redis_url


settings = Settings()
