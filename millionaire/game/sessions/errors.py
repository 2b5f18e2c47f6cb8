class GameSessionError(Exception):
    pass


class ConflictError(GameSessionError):
    def __init__(self, existing_game_id: int | None = None) -> None:
        super().__init__(existing_game_id)
        self.existing_game_id = existing_game_id


class AuthorizationError(GameSessionError):
    pass


class AlreadyFinishedError(GameSessionError):
    pass


class AlreadyUsedError(GameSessionError):
    def __init__(self, help_type: str) -> None:
        super().__init__(help_type)
        self.help_type = help_type


class GameNotFoundError(GameSessionError):
    pass


class UserNotFoundError(GameSessionError):
    pass


class NotEnoughQuestionsError(GameSessionError):
    def __init__(self, level: int) -> None:
        super().__init__(level)
        self.level = level


class InvalidAnswerKeyError(GameSessionError):
    pass


class UnknownHelpTypeError(GameSessionError):
    pass
