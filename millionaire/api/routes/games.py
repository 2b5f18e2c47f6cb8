from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Request, status

from millionaire.db.session import SessionLocal
from millionaire.game.constants import STATUS_TIMEOUT, STATUS_WON
from millionaire.game.sessions.errors import GameSessionError
from millionaire.game.sessions.service import GameSessionService
from millionaire.services.identity import build_request_context

from .games_helpers import (
    as_game_model,
    as_http_error,
    game_path,
    notice,
    require_user_id,
    user_path,
)
from .games_models import (
    AnswerRequest,
    AnswerResponse,
    GameActionResponse,
    GameModel,
    HelpRequest,
)

router = APIRouter(tags=["games"])


@router.post(
    "/games",
    response_model=GameActionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_game(request: Request) -> GameActionResponse:
    now_utc = datetime.now(timezone.utc)
    user_id: int | None = None
    try:
        async with SessionLocal.begin() as session:
            context = await build_request_context(session, request)
            user_id = require_user_id(context)
            snapshot = await GameSessionService.start_game(
                session,
                user_id=user_id,
                now_utc=now_utc,
            )
    except GameSessionError as exc:
        raise as_http_error(exc, user_id=user_id) from exc

    return GameActionResponse(
        game=as_game_model(snapshot),
        redirect_to=game_path(snapshot.game_id),
        notice=notice("notice", "GAME_CREATED"),
    )


@router.get("/games/{game_id}", response_model=GameModel)
async def show_game(game_id: int, request: Request) -> GameModel:
    now_utc = datetime.now(timezone.utc)
    user_id: int | None = None
    try:
        async with SessionLocal() as session:
            context = await build_request_context(session, request)
            user_id = require_user_id(context)
            snapshot = await GameSessionService.get_game(
                session,
                user_id=user_id,
                game_id=game_id,
            )
    except GameSessionError as exc:
        raise as_http_error(exc, user_id=user_id, game_id=game_id) from exc

    return as_game_model(snapshot)


@router.put("/games/{game_id}/answer", response_model=AnswerResponse)
async def answer_game(game_id: int, payload: AnswerRequest, request: Request) -> AnswerResponse:
    now_utc = datetime.now(timezone.utc)
    user_id: int | None = None
    try:
        async with SessionLocal.begin() as session:
            context = await build_request_context(session, request)
            user_id = require_user_id(context)
            result = await GameSessionService.answer(
                session,
                user_id=user_id,
                game_id=game_id,
                letter=payload.letter,
                now_utc=now_utc,
            )
    except GameSessionError as exc:
        raise as_http_error(exc, user_id=user_id, game_id=game_id) from exc

    game = as_game_model(result.game)
    if result.timed_out:
        answer_notice = notice("alert", "GAME_TIMEOUT")
    elif not result.is_correct:
        answer_notice = notice("alert", "GAME_LOST")
    elif result.game.status == STATUS_WON:
        answer_notice = notice("notice", "GAME_WON")
    else:
        answer_notice = None

    return AnswerResponse(
        game=game,
        redirect_to=user_path(user_id) if result.game.finished else game_path(game_id),
        notice=answer_notice,
        is_correct=result.is_correct,
        correct_answer_key=result.correct_answer_key,
        correct_answer_text=result.correct_answer_text,
    )


@router.put("/games/{game_id}/help", response_model=GameActionResponse)
async def use_game_help(game_id: int, payload: HelpRequest, request: Request) -> GameActionResponse:
    now_utc = datetime.now(timezone.utc)
    user_id: int | None = None
    try:
        async with SessionLocal.begin() as session:
            context = await build_request_context(session, request)
            user_id = require_user_id(context)
            result = await GameSessionService.use_help(
                session,
                user_id=user_id,
                game_id=game_id,
                help_type=payload.help_type,
                now_utc=now_utc,
            )
    except GameSessionError as exc:
        raise as_http_error(exc, user_id=user_id, game_id=game_id) from exc

    if result.timed_out:
        return GameActionResponse(
            game=as_game_model(result.game),
            redirect_to=user_path(user_id),
            notice=notice("alert", "GAME_TIMEOUT"),
        )
    return GameActionResponse(
        game=as_game_model(result.game),
        redirect_to=game_path(game_id),
        notice=notice("info", "HELP_USED"),
    )


@router.put("/games/{game_id}/take_money", response_model=GameActionResponse)
async def take_game_money(game_id: int, request: Request) -> GameActionResponse:
    now_utc = datetime.now(timezone.utc)
    user_id: int | None = None
    try:
        async with SessionLocal.begin() as session:
            context = await build_request_context(session, request)
            user_id = require_user_id(context)
            snapshot = await GameSessionService.take_money(
                session,
                user_id=user_id,
                game_id=game_id,
                now_utc=now_utc,
            )
    except GameSessionError as exc:
        raise as_http_error(exc, user_id=user_id, game_id=game_id) from exc

    if snapshot.status == STATUS_TIMEOUT:
        take_notice = notice("alert", "GAME_TIMEOUT")
    else:
        take_notice = notice("warning", "GAME_CASHED_OUT")
    return GameActionResponse(
        game=as_game_model(snapshot),
        redirect_to=user_path(user_id),
        notice=take_notice,
    )
