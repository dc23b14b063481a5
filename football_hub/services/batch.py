"""
Execução de sincronizações em lote.

Cada registro roda na sua própria sessão: a falha de um registro desfaz
apenas aquele registro. A concorrência é limitada por um semáforo e cada
registro tem um prazo. Nenhuma exceção escapa do lote; falhas viram
detalhes no resultado.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from football_hub.core.config import settings
from football_hub.core.exceptions import AppError
import logging

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Resultado agregado de um lote"""
    successful: int = 0
    failed: int = 0
    details: List[dict] = field(default_factory=list)

    def add(self, detail: dict) -> None:
        if detail.get("success"):
            self.successful += 1
        else:
            self.failed += 1
        self.details.append(detail)

    def to_dict(self) -> dict:
        return {
            "successful": self.successful,
            "failed": self.failed,
            "details": self.details,
        }


# handler(db, raw) -> detalhe {"success": ..., ...}
RecordHandler = Callable[[AsyncSession, Any], Awaitable[dict]]


def _external_ref(raw: Any, ref_field: str) -> Optional[str]:
    if isinstance(raw, dict) and raw.get(ref_field) not in (None, ""):
        return str(raw[ref_field])
    return None


async def run_batch(
    session_factory: async_sessionmaker,
    records: Iterable[Any],
    handler: RecordHandler,
    ref_field: str,
    label: str,
    max_concurrency: Optional[int] = None,
    record_timeout: Optional[float] = None,
) -> BatchResult:
    """Executa handler para cada registro com concorrência limitada"""
    records = list(records)
    max_concurrency = max_concurrency or settings.SYNC_MAX_CONCURRENCY
    record_timeout = record_timeout or settings.SYNC_RECORD_TIMEOUT
    semaphore = asyncio.Semaphore(max_concurrency)

    async def process(raw: Any) -> dict:
        external_ref = _external_ref(raw, ref_field)
        async with semaphore:
            try:
                async with session_factory() as db:
                    return await asyncio.wait_for(handler(db, raw), timeout=record_timeout)
            except asyncio.TimeoutError:
                logger.warning(f"⚠️ {label} {external_ref}: tempo limite de {record_timeout}s excedido")
                return {"success": False, "external_ref": external_ref, "reason": "Timed out"}
            except AppError as e:
                logger.warning(f"⚠️ {label} {external_ref} ignorado: {e.message}")
                return {"success": False, "external_ref": external_ref, "reason": e.message}
            except Exception as e:
                logger.error(f"❌ Erro ao sincronizar {label} {external_ref}: {e}")
                return {"success": False, "external_ref": external_ref, "reason": str(e)}

    result = BatchResult()
    for detail in await asyncio.gather(*(process(raw) for raw in records)):
        result.add(detail)

    logger.info(f"✅ Lote de {label}: {result.successful} ok, {result.failed} falhas")
    return result
