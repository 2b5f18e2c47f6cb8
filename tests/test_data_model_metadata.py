from __future__ import annotations

from sqlalchemy import CheckConstraint, UniqueConstraint

from millionaire.db.models import (  # noqa: F401
    AnalyticsEvent,
    Game,
    GameQuestion,
    Question,
    User,
)
from millionaire.db.models.base import Base


def test_all_tables_registered() -> None:
    assert set(Base.metadata.tables) == {
        "users",
        "questions",
        "games",
        "game_questions",
        "analytics_events",
    }


def test_games_have_single_in_progress_partial_index() -> None:
    games = Base.metadata.tables["games"]
    index = next(index for index in games.indexes if index.name == "uq_games_user_in_progress")

    assert index.unique is True
    assert [column.name for column in index.columns] == ["user_id"]
    assert str(index.dialect_options["postgresql"]["where"]) == "finished_at IS NULL"
    assert str(index.dialect_options["sqlite"]["where"]) == "finished_at IS NULL"


def test_game_constraints_named_by_convention() -> None:
    games = Base.metadata.tables["games"]
    check_names = {
        constraint.name
        for constraint in games.constraints
        if isinstance(constraint, CheckConstraint)
    }

    assert "ck_games_current_level_range" in check_names
    assert "ck_games_prize_non_negative" in check_names


def test_game_questions_unique_per_level() -> None:
    game_questions = Base.metadata.tables["game_questions"]
    unique_names = {
        constraint.name
        for constraint in game_questions.constraints
        if isinstance(constraint, UniqueConstraint)
    }

    assert "uq_game_questions_game_level" in unique_names


def test_game_question_option_map_and_correct_key() -> None:
    game_question = GameQuestion(option_a=2, option_b=0, option_c=3, option_d=1)

    assert game_question.option_map == {"a": 2, "b": 0, "c": 3, "d": 1}
    assert game_question.correct_answer_key(0) == "b"
    assert game_question.correct_answer_key(1) == "d"


def test_question_options_follow_column_order() -> None:
    question = Question(option_1="one", option_2="two", option_3="three", option_4="four")

    assert question.options == ("one", "two", "three", "four")
