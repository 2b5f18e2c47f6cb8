from __future__ import annotations

from fastapi import HTTPException, status

from millionaire.game.sessions.errors import (
    AlreadyFinishedError,
    AlreadyUsedError,
    AuthorizationError,
    ConflictError,
    GameNotFoundError,
    GameSessionError,
    InvalidAnswerKeyError,
    NotEnoughQuestionsError,
    UnknownHelpTypeError,
    UserNotFoundError,
)
from millionaire.game.sessions.types import GameSnapshot
from millionaire.services.identity import RequestContext

from .games_models import GameModel, GameQuestionModel, NoticeModel

ROOT_PATH = "/"
# Served by the external sign-in frontend, not by this API.
EXTERNAL_SIGN_IN_PATH = "/users/sign_in"


def game_path(game_id: int) -> str:
    return f"/games/{game_id}"


def user_path(user_id: int) -> str:
    return f"/users/{user_id}"


def notice(level: str, code: str) -> NoticeModel:
    return NoticeModel(level=level, code=code)


def http_error(status_code: int, code: str, redirect_to: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={"code": code, "redirect_to": redirect_to},
    )


def require_user_id(context: RequestContext) -> int:
    if context.user_id is None:
        raise http_error(
            status.HTTP_401_UNAUTHORIZED,
            "E_AUTH_REQUIRED",
            EXTERNAL_SIGN_IN_PATH,
        )
    return context.user_id


def as_http_error(
    exc: GameSessionError,
    *,
    user_id: int | None,
    game_id: int | None = None,
) -> HTTPException:
    if isinstance(exc, ConflictError):
        redirect_to = ROOT_PATH
        if exc.existing_game_id is not None:
            redirect_to = game_path(exc.existing_game_id)
        return http_error(status.HTTP_409_CONFLICT, "E_GAME_IN_PROGRESS", redirect_to)
    if isinstance(exc, AuthorizationError):
        return http_error(status.HTTP_403_FORBIDDEN, "E_FORBIDDEN", ROOT_PATH)
    if isinstance(exc, GameNotFoundError):
        return http_error(status.HTTP_404_NOT_FOUND, "E_GAME_NOT_FOUND", ROOT_PATH)
    if isinstance(exc, AlreadyFinishedError):
        redirect_to = user_path(user_id) if user_id is not None else ROOT_PATH
        return http_error(status.HTTP_409_CONFLICT, "E_GAME_FINISHED", redirect_to)
    if isinstance(exc, AlreadyUsedError):
        redirect_to = game_path(game_id) if game_id is not None else ROOT_PATH
        return http_error(status.HTTP_409_CONFLICT, "E_HELP_ALREADY_USED", redirect_to)
    if isinstance(exc, NotEnoughQuestionsError):
        return http_error(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "E_NOT_ENOUGH_QUESTIONS",
            ROOT_PATH,
        )
    if isinstance(exc, UserNotFoundError):
        return http_error(
            status.HTTP_401_UNAUTHORIZED,
            "E_AUTH_REQUIRED",
            EXTERNAL_SIGN_IN_PATH,
        )
    if isinstance(exc, (InvalidAnswerKeyError, UnknownHelpTypeError)):
        redirect_to = game_path(game_id) if game_id is not None else ROOT_PATH
        return http_error(status.HTTP_422_UNPROCESSABLE_ENTITY, "E_INVALID_INPUT", redirect_to)
    return http_error(status.HTTP_400_BAD_REQUEST, "E_GAME_ERROR", ROOT_PATH)


def as_game_model(snapshot: GameSnapshot) -> GameModel:
    current_question = None
    if snapshot.current_question is not None:
        current_question = GameQuestionModel(
            level=snapshot.current_question.level,
            text=snapshot.current_question.text,
            options=snapshot.current_question.options,
            help_hash=snapshot.current_question.help_hash,
        )
    return GameModel(
        id=snapshot.game_id,
        user_id=snapshot.user_id,
        current_level=snapshot.current_level,
        prize=snapshot.prize,
        status=snapshot.status,
        is_failed=snapshot.is_failed,
        fifty_fifty_used=snapshot.fifty_fifty_used,
        audience_help_used=snapshot.audience_help_used,
        friend_call_used=snapshot.friend_call_used,
        created_at=snapshot.created_at,
        finished_at=snapshot.finished_at,
        current_question=current_question,
    )
