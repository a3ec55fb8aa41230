class QuizEngineError(Exception):
    """Base class for quiz engine errors."""
    pass


class StorageUnavailable(QuizEngineError):
    """The durable store could not be read or written."""

    def __init__(self, operation: str, key: str = None, error: Exception = None):
        self.operation = operation
        self.key = key
        self.error = error
        detail = f"{operation} failed"
        if key:
            detail += f" for key '{key}'"
        if error is not None:
            detail += f": {error}"
        super().__init__(detail)


class PrematureSubmit(QuizEngineError):
    """Submit was requested before an answer was selected."""

    title = "Please select an answer"
    prompt = "Choose an option before proceeding."

    def __init__(self, question_index: int):
        self.question_index = question_index
        super().__init__(f"{self.title}. {self.prompt}")


class InvalidAnswerIndex(QuizEngineError, ValueError):
    def __init__(self, answer_index: int, option_count: int):
        self.answer_index = answer_index
        self.option_count = option_count
        super().__init__(f"Answer index {answer_index} is outside [0, {option_count})")


class SessionStateError(QuizEngineError):
    """Operation is not allowed in the session's current state."""
    pass


class InvalidStatsUpdate(QuizEngineError, ValueError):
    pass
