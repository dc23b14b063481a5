"""
Cache Redis async das leituras derivadas (classificação das ligas).

O Redis é opcional: sem conexão, toda leitura é miss e toda escrita é
ignorada. Depois de uma falha de conexão, nova tentativa só após
RECONNECT_INTERVAL segundos.
"""
import json
from time import monotonic
from typing import Any, Awaitable, Callable, Optional
import logging
from redis.asyncio import Redis
from football_hub.core.config import settings

logger = logging.getLogger(__name__)

RECONNECT_INTERVAL = 30.0


def standings_key(league_id: int) -> str:
    return f"league:{league_id}:standings"


class CacheManager:
    """Cliente Redis preguiçoso; erros viram cache miss"""

    def __init__(self, url: Optional[str] = None, enabled: Optional[bool] = None):
        self.url = url or settings.redis_url
        self.enabled = settings.CACHE_ENABLED if enabled is None else enabled
        self._client: Optional[Redis] = None
        self._last_failure: Optional[float] = None

    async def _connect(self) -> Optional[Redis]:
        if not self.enabled:
            return None
        if self._client is not None:
            return self._client
        if self._last_failure and monotonic() - self._last_failure < RECONNECT_INTERVAL:
            return None

        client = Redis.from_url(
            self.url,
            decode_responses=True,
            socket_connect_timeout=5,
            health_check_interval=30,
            max_connections=50,
        )
        try:
            await client.ping()
        except Exception as e:
            self._last_failure = monotonic()
            logger.error(f"Redis indisponível, cache desligado por {RECONNECT_INTERVAL:.0f}s: {e}")
            await client.aclose()
            return None

        self._client = client
        self._last_failure = None
        logger.info("Redis conectado")
        return client

    async def ping(self) -> bool:
        client = await self._connect()
        if client is None:
            return False
        try:
            return bool(await client.ping())
        except Exception as e:
            logger.warning(f"Redis não respondeu ao ping: {e}")
            return False

    async def get(self, key: str) -> Optional[Any]:
        client = await self._connect()
        if client is None:
            return None
        try:
            raw = await client.get(key)
        except Exception as e:
            logger.warning(f"Falha ao ler {key} do cache: {e}")
            return None
        return json.loads(raw) if raw else None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        client = await self._connect()
        if client is None:
            return False
        try:
            return bool(await client.setex(key, ttl or settings.CACHE_TTL, json.dumps(value, default=str)))
        except Exception as e:
            logger.warning(f"Falha ao gravar {key} no cache: {e}")
            return False

    async def remember(self, key: str, loader: Callable[[], Awaitable[Any]], ttl: Optional[int] = None) -> Any:
        """Valor do cache ou, no miss, o resultado de loader() já gravado"""
        cached = await self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached
        value = await loader()
        await self.set(key, value, ttl)
        return value

    async def delete_pattern(self, pattern: str) -> int:
        client = await self._connect()
        if client is None:
            return 0
        try:
            keys = [key async for key in client.scan_iter(match=pattern)]
            return await client.delete(*keys) if keys else 0
        except Exception as e:
            logger.warning(f"Falha ao remover {pattern} do cache: {e}")
            return 0

    async def invalidate_league(self, league_id: int) -> int:
        """Remove tudo que foi derivado das partidas da liga"""
        removed = await self.delete_pattern(f"league:{league_id}:*")
        if removed:
            logger.info(f"🧹 Cache da liga {league_id} invalidado ({removed} chaves)")
        return removed

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None


cache = CacheManager()
