from __future__ import annotations

import httpx
import pytest

from millionaire.api.routes.games_helpers import EXTERNAL_SIGN_IN_PATH
from millionaire.db.repo.games_repo import GamesRepo
from millionaire.main import app
from tests.game.game_fixtures import correct_key, create_user, seed_questions, wrong_key

pytestmark = pytest.mark.usefixtures("db")


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.asyncio
async def test_game_routes_require_sign_in() -> None:
    async with _client() as client:
        responses = [
            await client.post("/games"),
            await client.get("/games/1"),
            await client.put("/games/1/answer", json={"letter": "a"}),
            await client.put("/games/1/help", json={"help_type": "fifty_fifty"}),
            await client.put("/games/1/take_money"),
        ]

    for response in responses:
        assert response.status_code == 401
        assert response.json() == {
            "detail": {"code": "E_AUTH_REQUIRED", "redirect_to": EXTERNAL_SIGN_IN_PATH}
        }


@pytest.mark.asyncio
async def test_unknown_token_is_treated_as_anonymous() -> None:
    async with _client() as client:
        response = await client.post("/games", headers=_auth("not-a-real-token"))

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_game_and_reject_second_one() -> None:
    await seed_questions()
    _, token = await create_user()

    async with _client() as client:
        created = await client.post("/games", headers=_auth(token))
        conflict = await client.post("/games", headers=_auth(token))

    assert created.status_code == 201
    payload = created.json()
    game_id = payload["game"]["id"]
    assert payload["redirect_to"] == f"/games/{game_id}"
    assert payload["notice"] == {"level": "notice", "code": "GAME_CREATED"}
    assert payload["game"]["status"] == "in_progress"
    assert payload["game"]["current_question"]["level"] == 0

    assert conflict.status_code == 409
    assert conflict.json()["detail"] == {
        "code": "E_GAME_IN_PROGRESS",
        "redirect_to": f"/games/{game_id}",
    }


@pytest.mark.asyncio
async def test_create_game_conflict_from_unique_index_redirects_home(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    await seed_questions()
    _, token = await create_user()

    async with _client() as client:
        created = await client.post("/games", headers=_auth(token))

        async def fake_get_in_progress_for_user(session, *, user_id):  # noqa: ANN001
            del session, user_id
            return None

        monkeypatch.setattr(
            GamesRepo,
            "get_in_progress_for_user",
            staticmethod(fake_get_in_progress_for_user),
        )
        conflict = await client.post("/games", headers=_auth(token))

    assert created.status_code == 201
    assert conflict.status_code == 409
    assert conflict.json()["detail"] == {"code": "E_GAME_IN_PROGRESS", "redirect_to": "/"}


@pytest.mark.asyncio
async def test_foreign_and_missing_games() -> None:
    await seed_questions()
    _, owner_token = await create_user("Olga")
    _, other_token = await create_user("Mikhail")

    async with _client() as client:
        created = await client.post("/games", headers=_auth(owner_token))
        game_id = created.json()["game"]["id"]
        foreign = await client.get(f"/games/{game_id}", headers=_auth(other_token))
        foreign_answer = await client.put(
            f"/games/{game_id}/answer",
            json={"letter": "a"},
            headers=_auth(other_token),
        )
        missing = await client.get(f"/games/{game_id + 50}", headers=_auth(owner_token))
        own = await client.get(f"/games/{game_id}", headers=_auth(owner_token))

    assert foreign.status_code == 403
    assert foreign.json()["detail"] == {"code": "E_FORBIDDEN", "redirect_to": "/"}
    assert foreign_answer.status_code == 403
    assert missing.status_code == 404
    assert missing.json()["detail"]["code"] == "E_GAME_NOT_FOUND"
    assert own.status_code == 200
    assert own.json()["id"] == game_id


@pytest.mark.asyncio
async def test_correct_then_wrong_answer() -> None:
    await seed_questions()
    user_id, token = await create_user()

    async with _client() as client:
        created = await client.post("/games", headers=_auth(token))
        game_id = created.json()["game"]["id"]

        correct = await client.put(
            f"/games/{game_id}/answer",
            json={"letter": await correct_key(game_id)},
            headers=_auth(token),
        )
        wrong = await client.put(
            f"/games/{game_id}/answer",
            json={"letter": await wrong_key(game_id)},
            headers=_auth(token),
        )
        after = await client.put(
            f"/games/{game_id}/answer",
            json={"letter": "a"},
            headers=_auth(token),
        )

    assert correct.status_code == 200
    correct_payload = correct.json()
    assert correct_payload["is_correct"] is True
    assert correct_payload["notice"] is None
    assert correct_payload["redirect_to"] == f"/games/{game_id}"
    assert correct_payload["game"]["current_level"] == 1
    assert correct_payload["game"]["prize"] == 100

    assert wrong.status_code == 200
    wrong_payload = wrong.json()
    assert wrong_payload["is_correct"] is False
    assert wrong_payload["notice"] == {"level": "alert", "code": "GAME_LOST"}
    assert wrong_payload["redirect_to"] == f"/users/{user_id}"
    assert wrong_payload["game"]["status"] == "fail"
    assert wrong_payload["game"]["prize"] == 0
    assert wrong_payload["correct_answer_text"].startswith("right 1-")

    assert after.status_code == 409
    assert after.json()["detail"] == {
        "code": "E_GAME_FINISHED",
        "redirect_to": f"/users/{user_id}",
    }


@pytest.mark.asyncio
async def test_invalid_answer_payload_is_rejected() -> None:
    await seed_questions()
    _, token = await create_user()

    async with _client() as client:
        created = await client.post("/games", headers=_auth(token))
        game_id = created.json()["game"]["id"]
        response = await client.put(
            f"/games/{game_id}/answer",
            json={"letter": "z"},
            headers=_auth(token),
        )
        unknown_help = await client.put(
            f"/games/{game_id}/help",
            json={"help_type": "ask_the_host"},
            headers=_auth(token),
        )

    assert response.status_code == 422
    assert unknown_help.status_code == 422


@pytest.mark.asyncio
async def test_help_is_single_use() -> None:
    await seed_questions()
    _, token = await create_user()

    async with _client() as client:
        created = await client.post("/games", headers=_auth(token))
        game_id = created.json()["game"]["id"]
        first = await client.put(
            f"/games/{game_id}/help",
            json={"help_type": "audience_help"},
            headers=_auth(token),
        )
        second = await client.put(
            f"/games/{game_id}/help",
            json={"help_type": "audience_help"},
            headers=_auth(token),
        )

    assert first.status_code == 200
    first_payload = first.json()
    assert first_payload["notice"] == {"level": "info", "code": "HELP_USED"}
    assert first_payload["game"]["audience_help_used"] is True
    distribution = first_payload["game"]["current_question"]["help_hash"]["audience_help"]
    assert sum(distribution.values()) == 100

    assert second.status_code == 409
    assert second.json()["detail"] == {
        "code": "E_HELP_ALREADY_USED",
        "redirect_to": f"/games/{game_id}",
    }


@pytest.mark.asyncio
async def test_take_money_redirects_to_profile() -> None:
    await seed_questions()
    user_id, token = await create_user()

    async with _client() as client:
        created = await client.post("/games", headers=_auth(token))
        game_id = created.json()["game"]["id"]
        for _ in range(2):
            await client.put(
                f"/games/{game_id}/answer",
                json={"letter": await correct_key(game_id)},
                headers=_auth(token),
            )
        response = await client.put(f"/games/{game_id}/take_money", headers=_auth(token))
        profile = await client.get(f"/users/{user_id}", headers=_auth(token))

    assert response.status_code == 200
    payload = response.json()
    assert payload["notice"] == {"level": "warning", "code": "GAME_CASHED_OUT"}
    assert payload["redirect_to"] == f"/users/{user_id}"
    assert payload["game"]["status"] == "money"
    assert payload["game"]["prize"] == 200
    assert payload["game"]["current_question"] is None
    assert profile.json()["balance"] == 200
