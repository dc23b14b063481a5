"""
Configuração compartilhada dos testes.

Cada teste roda contra um SQLite temporário (aiosqlite) com as tabelas
criadas do zero. O provedor de dados e o LLM são substituídos por fakes via
dependency_overrides.
"""
import os

# Ambiente de teste antes de importar a aplicação
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["CACHE_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_TO_FILE"] = "false"
os.environ["AI_LAZY_GENERATION"] = "true"
os.environ["JWT_SECRET"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["DEEPSEEK_API_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ["ENVIRONMENT"] = "test"

from datetime import datetime
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import NullPool

from football_hub.core.database import Base, build_engine, build_session_factory, get_db, get_session_factory
from football_hub.core.exceptions import UpstreamUnavailableError
from football_hub.core.security import create_access_token, hash_password
from football_hub.main import app
from football_hub.models import League, Match, Team, User
from football_hub.services.ai_generator import AIGenerator, get_ai_generator
from football_hub.services.provider_client import get_football_api_client


class FakeProviderClient:
    """Provedor em memória com a mesma interface do FootballAPIClient"""

    def __init__(self):
        self.leagues: List[dict] = []
        self.teams: Dict[str, List[dict]] = {}
        self.events: Dict[str, List[dict]] = {}
        self.fail = False
        self.calls: List[tuple] = []

    def _check(self):
        if self.fail:
            raise UpstreamUnavailableError("Football data provider unavailable (status 503)")

    def get_leagues(self):
        self.calls.append(("get_leagues",))
        self._check()
        return self.leagues

    def get_teams(self, league_ref):
        self.calls.append(("get_teams", league_ref))
        self._check()
        return self.teams.get(str(league_ref), [])

    def get_events(self, league_ref, date_from, date_to):
        self.calls.append(("get_events", league_ref, date_from, date_to))
        self._check()
        return self.events.get(str(league_ref), [])


class FakeLLM:
    """Imita ChatOpenAI.ainvoke devolvendo respostas pré-definidas"""

    def __init__(self, replies: Optional[List[str]] = None):
        self.replies = list(replies or [])
        self.prompts: List[str] = []
        self.error: Optional[Exception] = None

    async def ainvoke(self, messages):
        self.prompts.append(messages[-1].content)
        if self.error:
            raise self.error
        reply = self.replies.pop(0) if self.replies else ""
        return SimpleNamespace(content=reply)


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def provider():
    return FakeProviderClient()


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def ai(llm):
    return AIGenerator(llm=llm)


@pytest_asyncio.fixture
async def client(session_factory, provider, ai):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_football_api_client] = lambda: provider
    app.dependency_overrides[get_ai_generator] = lambda: ai

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Dados de apoio
# ---------------------------------------------------------------------------

async def create_user(db_session, email: str, role: str = "user", password: str = "secret123") -> User:
    user = User(email=email, password=hash_password(password), fullname=email.split("@")[0], role=role)
    db_session.add(user)
    await db_session.commit()
    return user


def auth_headers(user: User) -> dict:
    token = create_access_token({"id": user.id, "email": user.email, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def admin_headers(db_session):
    admin = await create_user(db_session, "admin@example.com", role="admin")
    return auth_headers(admin)


@pytest_asyncio.fixture
async def user(db_session):
    return await create_user(db_session, "fan@example.com")


@pytest_asyncio.fixture
async def user_headers(user):
    return auth_headers(user)


async def seed_league(db_session, name="Premier League", country="England", external_ref="152") -> League:
    league = League(name=name, country=country, external_ref=external_ref)
    db_session.add(league)
    await db_session.commit()
    return league


async def seed_team(db_session, league: League, name: str, external_ref: str, **extra) -> Team:
    team = Team(league_id=league.id, name=name, external_ref=external_ref, **extra)
    db_session.add(team)
    await db_session.commit()
    return team


async def seed_match(
    db_session,
    league: League,
    home: Team,
    away: Team,
    external_ref: str,
    status: str = "Finished",
    home_score: Optional[str] = "1",
    away_score: Optional[str] = "0",
    match_date: Optional[datetime] = None,
    **extra,
) -> Match:
    match = Match(
        league_id=league.id,
        home_team_id=home.id,
        away_team_id=away.id,
        external_ref=external_ref,
        status=status,
        home_score=home_score,
        away_score=away_score,
        match_date=match_date or datetime(2025, 8, 16),
        **extra,
    )
    db_session.add(match)
    await db_session.commit()
    return match


def provider_team(team_key: str, name: str, players: Optional[List[dict]] = None, **extra) -> dict:
    """Registro de time no formato do provedor"""
    record = {
        "team_key": team_key,
        "team_name": name,
        "team_country": "England",
        "team_founded": "1886",
        "team_badge": f"https://cdn.example.com/{team_key}.png",
        "venue": {
            "venue_name": f"{name} Stadium",
            "venue_address": "1 Football Road",
            "venue_city": "London",
            "venue_capacity": "60000",
        },
        "coaches": [{"coach_name": f"{name} Coach"}],
        "players": players or [],
    }
    record.update(extra)
    return record


def provider_player(player_id, name: str, **extra) -> dict:
    record = {
        "player_id": player_id,
        "player_name": name,
        "player_type": "Forwards",
        "player_image": "",
        "player_age": "27",
        "player_number": "9",
    }
    record.update(extra)
    return record


def provider_match(match_id, home_ref: str, away_ref: str, **extra) -> dict:
    record = {
        "match_id": match_id,
        "match_date": "2025-08-16",
        "match_time": "15:00",
        "match_hometeam_id": home_ref,
        "match_awayteam_id": away_ref,
        "match_hometeam_ft_score": "2",
        "match_awayteam_ft_score": "1",
        "match_status": "Finished",
        "league_year": "2025/2026",
    }
    record.update(extra)
    return record
