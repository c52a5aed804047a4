"""Authoring-time preview: the question's real input control, rendered disabled."""

from typing import Any

from pydantic import BaseModel

from app.questions.base import read_field
from app.questions.registry import QuestionRegistry

EMPTY_QUESTION_TEXT = "Digite o texto da pergunta..."
PREVIEW_NOTE = "Esta é uma pré-visualização de como a pergunta aparecerá no formulário"


class QuestionPreview(BaseModel):
    heading: str
    question_text: str
    question_type: str
    known_type: bool
    control: dict[str, Any]
    note: str = PREVIEW_NOTE


def preview(registry: QuestionRegistry, question: Any, index: int) -> QuestionPreview:
    question_type = read_field(question, "question_type") or ""
    control = registry.render(question, value=None, disabled=True)
    return QuestionPreview(
        heading=f"Pergunta {index + 1}",
        question_text=read_field(question, "question_text") or EMPTY_QUESTION_TEXT,
        question_type=control.kind.value,
        known_type=registry.is_known(question_type),
        control=control.to_dict(),
    )
