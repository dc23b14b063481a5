"""Testes de cadastro, login, autorização e favoritos"""
from types import SimpleNamespace

from football_hub.api.v1.endpoints import sync as sync_endpoints
from football_hub.core.security import create_access_token

from tests.conftest import auth_headers, create_user, seed_league, seed_team

API = "/api/v1"


class TestUsers:
    """Cadastro, login e perfil"""

    async def test_register_and_login(self, client):
        """Testa cadastro, login e perfil"""
        response = await client.post(
            f"{API}/users/register",
            json={"email": "New@Example.com", "password": "secret123", "fullname": "New Fan"},
        )
        assert response.status_code == 201
        user = response.json()["data"]
        assert user["email"] == "new@example.com"
        assert user["role"] == "user"
        assert "password" not in user

        response = await client.post(
            f"{API}/users/login", json={"email": "new@example.com", "password": "secret123"}
        )
        assert response.status_code == 200
        token = response.json()["data"]["access_token"]

        response = await client.get(f"{API}/users/{user['id']}", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["data"]["fullname"] == "New Fan"

    async def test_duplicate_email(self, client, user):
        """Testa cadastro com email repetido"""
        response = await client.post(
            f"{API}/users/register", json={"email": "fan@example.com", "password": "secret123"}
        )
        assert response.status_code == 409

    async def test_invalid_registration(self, client):
        """Testa cadastro com dados inválidos"""
        response = await client.post(f"{API}/users/register", json={"email": "not-an-email", "password": "123"})
        assert response.status_code == 400
        fields = {error["field"] for error in response.json()["errors"]}
        assert fields == {"email", "password"}

    async def test_password_over_bcrypt_limit(self, client):
        """Testa senha acima de 72 bytes no cadastro"""
        response = await client.post(
            f"{API}/users/register", json={"email": "long@example.com", "password": "x" * 100}
        )
        assert response.status_code == 400
        assert [error["field"] for error in response.json()["errors"]] == ["password"]

        # 40 caracteres, 80 bytes
        response = await client.post(
            f"{API}/users/register", json={"email": "accent@example.com", "password": "é" * 40}
        )
        assert response.status_code == 400

        response = await client.post(
            f"{API}/users/register", json={"email": "edge@example.com", "password": "x" * 72}
        )
        assert response.status_code == 201

    async def test_login_with_overlong_password(self, client, user):
        """Testa login com senha acima de 72 bytes"""
        response = await client.post(
            f"{API}/users/login", json={"email": "fan@example.com", "password": "x" * 100}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    async def test_wrong_password(self, client, user):
        """Testa login com senha errada"""
        response = await client.post(
            f"{API}/users/login", json={"email": "fan@example.com", "password": "wrong-password"}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    async def test_profile_of_another_user_is_forbidden(self, client, db_session, user_headers):
        """Testa acesso ao perfil de outro usuário"""
        other = await create_user(db_session, "other@example.com")
        response = await client.get(f"{API}/users/{other.id}", headers=user_headers)
        assert response.status_code == 403

    async def test_admin_can_read_any_profile(self, client, user, admin_headers):
        """Testa admin lendo qualquer perfil"""
        response = await client.get(f"{API}/users/{user.id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["email"] == "fan@example.com"

    async def test_invalid_token(self, client, user):
        """Testa token inválido"""
        response = await client.get(f"{API}/users/{user.id}", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid authentication token"

    async def test_expired_token(self, client, user):
        """Testa token expirado"""
        token = create_access_token({"id": user.id}, expires_minutes=-1)
        response = await client.get(f"{API}/users/{user.id}", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    async def test_token_of_deleted_user(self, client):
        """Testa token de usuário removido"""
        headers = auth_headers(SimpleNamespace(id=12345, email="ghost@example.com", role="user"))
        response = await client.get(f"{API}/favorites", headers=headers)
        assert response.status_code == 401
        assert response.json()["message"] == "User not found"


class TestFavorites:
    """Favoritos do usuário autenticado"""

    async def test_add_list_and_remove(self, client, db_session, user_headers):
        """Testa inclusão, listagem e remoção de favoritos"""
        league = await seed_league(db_session)
        team = await seed_team(db_session, league, "Arsenal", "141")

        response = await client.post(f"{API}/favorites/{team.id}", headers=user_headers)
        assert response.status_code == 201
        favorite = response.json()["data"]
        assert favorite["team"]["name"] == "Arsenal"

        response = await client.get(f"{API}/favorites", headers=user_headers)
        assert response.json()["meta"] == {"total": 1}

        response = await client.delete(f"{API}/favorites/{favorite['id']}", headers=user_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Favorite removed successfully"

        response = await client.get(f"{API}/favorites", headers=user_headers)
        assert response.json()["data"] == []

    async def test_duplicate_favorite_is_conflict(self, client, db_session, user_headers):
        """Testa favorito repetido"""
        league = await seed_league(db_session)
        team = await seed_team(db_session, league, "Arsenal", "141")

        await client.post(f"{API}/favorites/{team.id}", headers=user_headers)
        response = await client.post(f"{API}/favorites/{team.id}", headers=user_headers)

        assert response.status_code == 409
        assert response.json()["message"] == "Team is already in favorites"

    async def test_unknown_team(self, client, user_headers):
        """Testa favorito de time inexistente"""
        response = await client.post(f"{API}/favorites/999", headers=user_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Team with ID 999 not found"

    async def test_cannot_remove_favorite_of_another_user(self, client, db_session, user_headers):
        """Testa remoção de favorito de outro usuário"""
        league = await seed_league(db_session)
        team = await seed_team(db_session, league, "Arsenal", "141")
        other = await create_user(db_session, "other@example.com")

        response = await client.post(f"{API}/favorites/{team.id}", headers=auth_headers(other))
        favorite_id = response.json()["data"]["id"]

        response = await client.delete(f"{API}/favorites/{favorite_id}", headers=user_headers)
        assert response.status_code == 404
        assert response.json()["message"] == f"Favorite with ID {favorite_id} not found for this user"

    async def test_favorites_require_login(self, client):
        """Testa favoritos sem login"""
        response = await client.get(f"{API}/favorites")
        assert response.status_code == 401


class FakeTask:
    def __init__(self):
        self.calls = []

    def delay(self, *args):
        self.calls.append(args)
        return SimpleNamespace(id="task-1")


class TestSyncTrigger:
    """Enfileiramento da sincronização completa"""

    async def test_trigger_single_league(self, client, db_session, admin_headers, monkeypatch):
        """Testa disparo da sincronização de uma liga"""
        league = await seed_league(db_session)
        task = FakeTask()
        monkeypatch.setattr(sync_endpoints, "sync_league_task", task)

        response = await client.post(f"{API}/sync/trigger", params={"league_id": league.id}, headers=admin_headers)

        assert response.status_code == 202
        assert response.json()["data"] == {"task_id": "task-1", "league_id": league.id}
        assert task.calls == [(league.id,)]

    async def test_trigger_all_leagues(self, client, admin_headers, monkeypatch):
        """Testa disparo da sincronização de todas as ligas"""
        task = FakeTask()
        monkeypatch.setattr(sync_endpoints, "sync_all_leagues_task", task)

        response = await client.post(f"{API}/sync/trigger", headers=admin_headers)

        assert response.status_code == 202
        assert task.calls == [()]

    async def test_trigger_unknown_league(self, client, admin_headers):
        """Testa disparo para liga inexistente"""
        response = await client.post(f"{API}/sync/trigger", params={"league_id": 99}, headers=admin_headers)
        assert response.status_code == 404
