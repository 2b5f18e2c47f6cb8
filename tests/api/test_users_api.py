from __future__ import annotations

import httpx
import pytest

from millionaire.db.repo.users_repo import UsersRepo
from millionaire.db.session import SessionLocal
from millionaire.main import app
from tests.game.game_fixtures import create_user

pytestmark = pytest.mark.usefixtures("db")


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


async def _credit(user_id: int, amount: int) -> None:
    async with SessionLocal.begin() as session:
        await UsersRepo.credit_balance(session, user_id=user_id, amount=amount)


@pytest.mark.asyncio
async def test_profile_can_edit_only_for_owner() -> None:
    owner_id, owner_token = await create_user("Olga")
    _, other_token = await create_user("Mikhail")

    async with _client() as client:
        own = await client.get(
            f"/users/{owner_id}",
            headers={"Authorization": f"Bearer {owner_token}"},
        )
        foreign = await client.get(
            f"/users/{owner_id}",
            headers={"Authorization": f"Bearer {other_token}"},
        )
        anonymous = await client.get(f"/users/{owner_id}")

    assert own.status_code == 200
    assert own.json() == {
        "id": owner_id,
        "name": "Olga",
        "balance": 0,
        "can_edit": True,
        "games": [],
    }
    assert foreign.json()["can_edit"] is False
    assert anonymous.json()["can_edit"] is False


@pytest.mark.asyncio
async def test_missing_profile_returns_404() -> None:
    async with _client() as client:
        response = await client.get("/users/999")

    assert response.status_code == 404
    assert response.json()["detail"] == {"code": "E_USER_NOT_FOUND", "redirect_to": "/"}


@pytest.mark.asyncio
async def test_leaderboard_orders_by_balance() -> None:
    poor_id, _ = await create_user("Poor")
    rich_id, _ = await create_user("Rich")
    await _credit(poor_id, 100)
    await _credit(rich_id, 32000)

    async with _client() as client:
        home = await client.get("/")
        users = await client.get("/users", params={"limit": 1})

    assert home.status_code == 200
    assert [entry["id"] for entry in home.json()["users"]] == [rich_id, poor_id]
    assert home.json()["users"][0] == {
        "id": rich_id,
        "name": "Rich",
        "balance": 32000,
        "profile_path": f"/users/{rich_id}",
    }
    assert [entry["id"] for entry in users.json()["users"]] == [rich_id]
