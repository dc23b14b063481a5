"""Testes dos endpoints de ligas e classificação"""
from tests.conftest import seed_league, seed_match, seed_team

API = "/api/v1"

PREMIER_LEAGUE = {
    "league_id": "152",
    "league_name": "Premier League",
    "country_name": "England",
    "league_logo": "https://cdn.example.com/152.png",
}


class TestHealth:
    """Endpoints de infraestrutura"""

    async def test_health_check(self, client):
        """Testa endpoint de health check"""
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "ok"
        assert response.json()["cache"] == "disabled"

    async def test_root_endpoint(self, client):
        """Testa endpoint raiz"""
        response = await client.get("/")
        data = response.json()
        assert "message" in data
        assert "endpoints" in data

    async def test_request_id_is_echoed(self, client):
        """Testa headers de rastreio e segurança"""
        response = await client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"
        assert "X-Process-Time" in response.headers
        assert response.headers["X-Content-Type-Options"] == "nosniff"


class TestLeagues:
    """Listagem, detalhe e sincronização de ligas"""

    async def test_list_leagues(self, client, db_session):
        """Testa listagem de ligas"""
        await seed_league(db_session)

        response = await client.get(f"{API}/leagues")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["meta"] == {"total": 1}
        assert body["data"][0]["name"] == "Premier League"

    async def test_league_not_found(self, client):
        """Testa liga inexistente"""
        response = await client.get(f"{API}/leagues/999")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "League not found"}

    async def test_invalid_path_parameter_is_bad_request(self, client):
        """Testa id inválido no path"""
        response = await client.get(f"{API}/leagues/0")
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid league ID"}

        response = await client.get(f"{API}/leagues/abc/standings")
        assert response.json()["message"] == "Invalid league ID"

    async def test_sync_league_by_name(self, client, provider, admin_headers):
        """Testa sincronização de liga pelo nome"""
        provider.leagues = [
            {"league_id": "302", "league_name": "La Liga", "country_name": "Spain"},
            PREMIER_LEAGUE,
        ]

        response = await client.post(
            f"{API}/leagues/sync",
            json={"leagueName": "premier league", "leagueCountry": "England"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["external_ref"] == "152"
        assert data["logo_url"] == PREMIER_LEAGUE["league_logo"]

    async def test_sync_existing_league_is_conflict(self, client, provider, db_session, admin_headers):
        """Testa sincronização de liga já cadastrada"""
        await seed_league(db_session)
        provider.leagues = [PREMIER_LEAGUE]

        response = await client.post(
            f"{API}/leagues/sync",
            json={"leagueName": "Premier League", "leagueCountry": "England"},
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert provider.calls == []

    async def test_sync_unknown_league(self, client, provider, admin_headers):
        """Testa sincronização de liga que o provedor não conhece"""
        provider.leagues = [PREMIER_LEAGUE]

        response = await client.post(
            f"{API}/leagues/sync",
            json={"leagueName": "Serie A", "leagueCountry": "Italy"},
            headers=admin_headers,
        )

        assert response.status_code == 404
        assert "Serie A" in response.json()["message"]

    async def test_provider_outage_is_bad_gateway(self, client, provider, admin_headers):
        """Testa provedor fora do ar"""
        provider.fail = True

        response = await client.post(
            f"{API}/leagues/sync",
            json={"leagueName": "Premier League", "leagueCountry": "England"},
            headers=admin_headers,
        )

        assert response.status_code == 502
        assert response.json()["success"] is False

    async def test_sync_requires_authentication(self, client):
        """Testa sincronização sem token"""
        response = await client.post(
            f"{API}/leagues/sync", json={"leagueName": "Premier League", "leagueCountry": "England"}
        )
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_sync_requires_admin(self, client, user_headers):
        """Testa sincronização por usuário comum"""
        response = await client.post(
            f"{API}/leagues/sync",
            json={"leagueName": "Premier League", "leagueCountry": "England"},
            headers=user_headers,
        )
        assert response.status_code == 403
        assert response.json()["message"] == "Admin access required"

    async def test_sync_with_missing_body_fields(self, client, admin_headers):
        """Testa corpo incompleto na sincronização"""
        response = await client.post(f"{API}/leagues/sync", json={"leagueName": "x"}, headers=admin_headers)
        assert response.status_code == 400


class TestStandings:
    """Classificação calculada a partir das partidas"""

    async def test_standings(self, client, db_session):
        """Testa classificação calculada pelas partidas"""
        league = await seed_league(db_session)
        a = await seed_team(db_session, league, "A", "1")
        b = await seed_team(db_session, league, "B", "2")
        await seed_match(db_session, league, a, b, "m1", home_score="2", away_score="1")
        await seed_match(db_session, league, b, a, "m2", home_score="0", away_score="0")
        await seed_match(db_session, league, a, b, "m3", status="", home_score=None, away_score=None)

        response = await client.get(f"{API}/leagues/{league.id}/standings")

        assert response.status_code == 200
        body = response.json()
        assert body["meta"] == {"total": 2}
        first, second = body["data"]
        assert (first["team_id"], first["points"], first["played"], first["position"]) == (a.id, 4, 2, 1)
        assert (second["team_id"], second["points"], second["goal_difference"]) == (b.id, 1, -1)

    async def test_standings_without_finished_matches(self, client, db_session):
        """Testa classificação sem partidas encerradas"""
        league = await seed_league(db_session)
        response = await client.get(f"{API}/leagues/{league.id}/standings")
        assert response.status_code == 200
        assert response.json()["data"] == []

    async def test_standings_unknown_league(self, client):
        """Testa classificação de liga inexistente"""
        response = await client.get(f"{API}/leagues/42/standings")
        assert response.status_code == 404
