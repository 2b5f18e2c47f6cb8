from millionaire.db.models.analytics_events import AnalyticsEvent
from millionaire.db.models.game_questions import GameQuestion
from millionaire.db.models.games import Game
from millionaire.db.models.questions import Question
from millionaire.db.models.users import User

__all__ = [
    "AnalyticsEvent",
    "Game",
    "GameQuestion",
    "Question",
    "User",
]
