class QuestionError(Exception):
    """Base exception for question engine errors."""


class UnknownQuestionTypeError(QuestionError):
    """Raised by strict registry lookups for a tag outside the closed set."""

    def __init__(self, question_type: str) -> None:
        self.question_type = question_type
        super().__init__(f"Unknown question type '{question_type}'")


class AnswerShapeError(QuestionError):
    """Raised when an answer value does not have the shape its question type expects."""

    def __init__(self, question_type: str, message: str) -> None:
        self.question_type = question_type
        super().__init__(f"[{question_type}] {message}")
