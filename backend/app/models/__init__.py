from app.models.project import Project
from app.models.question import Question
from app.models.response import QuestionResponse

__all__ = [
    "Project",
    "Question",
    "QuestionResponse",
]
