"""Testes da sincronização com o provedor (upsert, lote e partidas)"""
import asyncio

from sqlalchemy import func, select

from football_hub.models import League, Match, Player, Team
from football_hub.services.batch import run_batch
from football_hub.services.league_service import LeagueService, batch_synchronize_leagues
from football_hub.services.match_service import (
    TEAMS_NOT_FOUND,
    TEAMS_OUTSIDE_LEAGUE,
    MatchService,
    batch_synchronize_matches,
    filter_season,
)
from football_hub.services import team_service
from football_hub.services.player_service import PlayerService
from football_hub.services.team_service import TeamService, batch_synchronize_teams, synchronize_league_teams

from tests.conftest import provider_match, provider_player, provider_team, seed_league, seed_team


async def count(session_factory, model) -> int:
    async with session_factory() as db:
        return (await db.execute(select(func.count(model.id)))).scalar()


SYNC_STAMPS = ("updated_at", "last_synced_at")


async def stored_row(session_factory, model, external_ref: str) -> dict:
    """Colunas gravadas da linha, sem os carimbos de sincronização"""
    async with session_factory() as db:
        row = (await db.execute(select(model).filter(model.external_ref == external_ref))).scalar_one()
    return {
        column.key: getattr(row, column.key)
        for column in model.__table__.columns
        if column.key not in SYNC_STAMPS
    }


class TestUpsert:
    """Upsert pela referência externa"""

    async def test_league_upsert_is_idempotent(self, session_factory):
        """Testa upsert repetido de liga"""
        raw = {"league_id": "152", "league_name": "Premier League", "country_name": "England"}

        async with session_factory() as db:
            await LeagueService(db).synchronize_league_from_api(raw)
        first = await stored_row(session_factory, League, "152")
        async with session_factory() as db:
            await LeagueService(db).synchronize_league_from_api(raw)

        assert await stored_row(session_factory, League, "152") == first
        assert (first["name"], first["country"]) == ("Premier League", "England")
        assert await count(session_factory, League) == 1

    async def test_team_upsert_is_idempotent(self, session_factory, db_session):
        """Testa upsert repetido de time"""
        league = await seed_league(db_session)
        raw = provider_team("141", "Arsenal")

        async with session_factory() as db:
            await TeamService(db).synchronize_team_from_api(raw, league.id)
        first = await stored_row(session_factory, Team, "141")
        async with session_factory() as db:
            await TeamService(db).synchronize_team_from_api(raw, league.id)

        assert await stored_row(session_factory, Team, "141") == first
        assert first["stadium_name"] == "Arsenal Stadium"
        assert await count(session_factory, Team) == 1

    async def test_player_upsert_is_idempotent(self, session_factory, db_session):
        """Testa upsert repetido de jogador"""
        league = await seed_league(db_session)
        team = await seed_team(db_session, league, "Arsenal", "141")
        raw = provider_player(7, "Bukayo Saka", player_number="7")

        async with session_factory() as db:
            await PlayerService(db).synchronize_player_from_api(raw, team.id)
        first = await stored_row(session_factory, Player, "7")
        async with session_factory() as db:
            await PlayerService(db).synchronize_player_from_api(raw, team.id)

        assert await stored_row(session_factory, Player, "7") == first
        assert (first["team_id"], first["shirt_number"]) == (team.id, "7")
        assert await count(session_factory, Player) == 1

    async def test_match_upsert_is_idempotent(self, session_factory, db_session):
        """Testa upsert repetido de partida"""
        league = await seed_league(db_session)
        await seed_team(db_session, league, "Arsenal", "141", stadium_name="Emirates Stadium")
        await seed_team(db_session, league, "Chelsea", "142")
        raw = provider_match(9001, "141", "142")

        async with session_factory() as db:
            await MatchService(db).synchronize_match_from_api(raw, league.id)
        first = await stored_row(session_factory, Match, "9001")
        async with session_factory() as db:
            await MatchService(db).synchronize_match_from_api(raw, league.id)

        assert await stored_row(session_factory, Match, "9001") == first
        assert (first["home_score"], first["away_score"], first["venue"]) == ("2", "1", "Emirates Stadium")
        assert await count(session_factory, Match) == 1

    async def test_team_upsert_updates_in_place(self, session_factory, db_session):
        """Testa atualização do time na mesma linha"""
        league = await seed_league(db_session)

        async with session_factory() as db:
            created = await TeamService(db).synchronize_team_from_api(provider_team("141", "Arsenal"), league.id)
        async with session_factory() as db:
            updated = await TeamService(db).synchronize_team_from_api(
                provider_team("141", "Arsenal FC", coaches=[{"coach_name": "New Coach"}]), league.id
            )

        assert created.id == updated.id
        assert updated.name == "Arsenal FC"
        assert updated.coach == "New Coach"
        assert await count(session_factory, Team) == 1

    async def test_team_upsert_keeps_local_fields(self, session_factory, db_session):
        """Testa campos locais preservados no upsert"""
        league = await seed_league(db_session)
        await seed_team(
            db_session, league, "Arsenal", "141",
            description="Existing description", img_urls=["https://img.example.com/1.png"],
        )

        async with session_factory() as db:
            team = await TeamService(db).synchronize_team_from_api(provider_team("141", "Arsenal"), league.id)

        assert team.description == "Existing description"
        assert team.img_urls == ["https://img.example.com/1.png"]


class TestBatch:
    """Execução em lote"""

    async def test_one_bad_record_does_not_stop_the_batch(self, session_factory):
        """Testa registro ruim no meio do lote"""
        records = [
            {"league_id": str(ref), "league_name": f"League {ref}", "country_name": "England"}
            for ref in range(1, 6)
        ]
        records.insert(2, {"league_name": "No id"})

        result = await batch_synchronize_leagues(session_factory, records)

        assert result.successful == 5
        assert result.failed == 1
        assert len(result.details) == 6
        failure = next(detail for detail in result.details if not detail["success"])
        assert "league_id" in failure["reason"]
        assert await count(session_factory, League) == 5

    async def test_unexpected_exception_becomes_failed_detail(self, session_factory):
        """Testa exceção inesperada no lote"""
        async def handler(db, raw):
            if raw["id"] == "boom":
                raise RuntimeError("kaboom")
            return {"success": True, "external_ref": raw["id"]}

        result = await run_batch(
            session_factory, [{"id": "ok"}, {"id": "boom"}], handler, ref_field="id", label="teste"
        )

        assert (result.successful, result.failed) == (1, 1)
        assert {"success": False, "external_ref": "boom", "reason": "kaboom"} in result.details

    async def test_record_timeout(self, session_factory):
        """Testa prazo por registro"""
        async def handler(db, raw):
            await asyncio.sleep(1)
            return {"success": True}

        result = await run_batch(
            session_factory, [{"id": "slow"}], handler, ref_field="id", label="teste", record_timeout=0.01
        )

        assert result.failed == 1
        assert result.details[0]["reason"] == "Timed out"

    async def test_concurrency_is_bounded(self, session_factory):
        """Testa limite de concorrência"""
        running = 0
        peak = 0

        async def handler(db, raw):
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1
            return {"success": True}

        result = await run_batch(
            session_factory, [{"id": str(i)} for i in range(12)], handler,
            ref_field="id", label="teste", max_concurrency=3,
        )

        assert result.successful == 12
        assert peak <= 3

    async def test_concurrent_upserts_of_same_team_keep_one_row(self, session_factory, db_session):
        """Testa upserts concorrentes do mesmo time"""
        league = await seed_league(db_session)

        result = await batch_synchronize_teams(
            session_factory, [provider_team("141", "Arsenal") for _ in range(4)], league.id
        )

        assert result.successful == 4
        assert await count(session_factory, Team) == 1


class TestLeagueTeams:
    """Times e elencos"""

    async def test_teams_then_players(self, session_factory, db_session):
        """Testa times e depois elencos"""
        league = await seed_league(db_session)
        raw_teams = [
            provider_team("141", "Arsenal", players=[
                provider_player(1, "Player One"),
                provider_player(2, "Player Two"),
                {"player_name": "No id"},
            ]),
            provider_team("142", "Chelsea"),
            {"team_name": "No key"},
        ]

        result = await synchronize_league_teams(session_factory, league, raw_teams)

        assert (result.successful, result.failed) == (2, 1)
        arsenal = next(d for d in result.details if d.get("external_ref") == "141")
        chelsea = next(d for d in result.details if d.get("external_ref") == "142")
        assert arsenal["players"] == {"successful": 2, "failed": 1}
        assert chelsea["players"] == {"successful": 0, "failed": 0}
        assert await count(session_factory, Player) == 2

    async def test_team_sync_invalidates_cached_standings(self, session_factory, db_session, monkeypatch):
        """Testa invalidação da classificação após sincronizar times"""
        league = await seed_league(db_session)
        invalidated = []

        async def invalidate_league(league_id):
            invalidated.append(league_id)
            return 1

        monkeypatch.setattr(team_service.cache, "invalidate_league", invalidate_league)

        await synchronize_league_teams(session_factory, league, [{"team_name": "No key"}])
        assert invalidated == []

        await synchronize_league_teams(session_factory, league, [provider_team("141", "Arsenal FC")])
        assert invalidated == [league.id]


class TestMatches:
    """Partidas"""

    async def seed_teams(self, db_session):
        league = await seed_league(db_session)
        home = await seed_team(db_session, league, "Arsenal", "141", stadium_name="Emirates Stadium")
        away = await seed_team(db_session, league, "Chelsea", "142")
        return league, home, away

    async def test_match_is_stored_with_home_venue(self, session_factory, db_session):
        """Testa partida com estádio do mandante"""
        league, home, away = await self.seed_teams(db_session)

        async with session_factory() as db:
            outcome = await MatchService(db).synchronize_match_from_api(provider_match(9001, "141", "142"), league.id)

        assert outcome.success is True
        assert outcome.match.home_team_id == home.id
        assert outcome.match.away_team_id == away.id
        assert outcome.match.venue == "Emirates Stadium"

    async def test_unknown_teams_are_skipped_without_error(self, session_factory, db_session):
        """Testa partida com times desconhecidos"""
        league, _, _ = await self.seed_teams(db_session)

        async with session_factory() as db:
            outcome = await MatchService(db).synchronize_match_from_api(provider_match(9001, "141", "999"), league.id)

        assert outcome.success is False
        assert outcome.to_detail() == {
            "success": False,
            "external_ref": "9001",
            "reason": TEAMS_NOT_FOUND,
            "home_team": "Arsenal",
            "away_team": "N/A",
        }
        assert await count(session_factory, Match) == 0

    async def test_teams_from_other_league_are_rejected(self, session_factory, db_session):
        """Testa partida com times de outra liga"""
        league, _, _ = await self.seed_teams(db_session)
        other = await seed_league(db_session, name="La Liga", country="Spain", external_ref="302")
        await seed_team(db_session, other, "Barcelona", "97")

        async with session_factory() as db:
            outcome = await MatchService(db).synchronize_match_from_api(provider_match(9001, "141", "97"), league.id)

        assert outcome.success is False
        assert outcome.reason == TEAMS_OUTSIDE_LEAGUE

    async def test_batch_reports_skips_and_updates_score(self, session_factory, db_session):
        """Testa lote de partidas e atualização de placar"""
        league, _, _ = await self.seed_teams(db_session)
        events = [
            provider_match(9001, "141", "142", match_hometeam_ft_score="", match_awayteam_ft_score="", match_status=""),
            provider_match(9002, "141", "404"),
        ]

        result = await batch_synchronize_matches(session_factory, events, league.id)
        assert (result.successful, result.failed) == (1, 1)

        # mesma partida agora encerrada
        result = await batch_synchronize_matches(session_factory, [provider_match(9001, "141", "142")], league.id)
        assert result.successful == 1

        async with session_factory() as db:
            match = (await db.execute(select(Match).filter(Match.external_ref == "9001"))).scalar_one()
        assert (match.home_score, match.away_score, match.status) == ("2", "1", "Finished")
        assert await count(session_factory, Match) == 1


def test_filter_season_keeps_events_without_year():
    """Testa filtro de temporada"""
    events = [
        {"match_id": "1", "league_year": "2025/2026"},
        {"match_id": "2", "league_year": "2024/2025"},
        {"match_id": "3"},
    ]
    assert [e["match_id"] for e in filter_season(events, "2025/2026")] == ["1", "3"]
    assert len(filter_season(events, None)) == 3
