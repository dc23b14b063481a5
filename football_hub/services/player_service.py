"""Service de Jogador (Async)"""
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from typing import Any, Iterable, List, Optional
from football_hub.models.player import Player
from football_hub.repositories.player_repository import PlayerRepository
from football_hub.schemas.provider import ProviderPlayer
from football_hub.services.batch import BatchResult, run_batch
import logging

logger = logging.getLogger(__name__)


class PlayerService:
    """Service async para operações com jogadores"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = PlayerRepository(db)

    async def get_all_players(self) -> List[Player]:
        return await self.repository.get_all()

    async def get_player_by_id(self, player_id: int) -> Optional[Player]:
        return await self.repository.get_by_id(player_id)

    async def get_players_by_team(self, team_id: int, limit: Optional[int] = None) -> List[Player]:
        return await self.repository.get_by_team(team_id, limit=limit)

    async def synchronize_player_from_api(self, raw: Any, team_id: int) -> Player:
        """Upsert de um jogador a partir do registro bruto do provedor"""
        record = ProviderPlayer.parse(raw)
        player = await self.repository.upsert(record.to_values(team_id))
        logger.debug(f"Jogador sincronizado: {player.full_name} ({player.external_ref})")
        return player


async def batch_synchronize_players(
    session_factory: async_sessionmaker,
    records: Iterable[Any],
    team_id: int,
) -> BatchResult:
    """Upsert em lote dos jogadores de um time"""

    async def handle(db: AsyncSession, raw: Any) -> dict:
        player = await PlayerService(db).synchronize_player_from_api(raw, team_id)
        return {"success": True, "id": player.id, "external_ref": player.external_ref, "name": player.full_name}

    return await run_batch(session_factory, records, handle, ref_field="player_id", label="jogador")
