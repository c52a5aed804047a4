"""Project and question authoring helpers."""

import secrets
from typing import Any

from app.core.config import settings
from app.models.project import Project
from app.models.question import Question
from app.questions import question_registry
from app.questions.models import QuestionType


def generate_link() -> str:
    """Random URL-safe slug for a project's public form."""
    return secrets.token_urlsafe(8)


def public_url(project: Project) -> str:
    return f"{settings.PUBLIC_FORM_BASE_URL.rstrip('/')}/f/{project.link_unique}"


def seed_config(question_type: QuestionType | str, scale_config: dict[str, Any] | None) -> dict[str, Any]:
    """The type's starting config with the author's keys laid over it.

    Raises:
        UnknownQuestionTypeError: If ``question_type`` is not a known type.
    """
    config = question_registry.require(question_type).default_config()
    config.update(scale_config or {})
    return config


def build_question(
    question_text: str,
    question_type: QuestionType | str,
    scale_config: dict[str, Any] | None,
    order_index: int,
) -> Question:
    kind = question_registry.require(question_type)
    return Question(
        question_text=question_text,
        question_type=kind.name.value,
        scale_config=seed_config(kind.name, scale_config),
        order_index=order_index,
    )


def next_order_index(project: Project) -> int:
    if not project.questions:
        return 0
    return max(q.order_index for q in project.questions) + 1
