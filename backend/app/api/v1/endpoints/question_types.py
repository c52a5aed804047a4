"""Question type catalogue — defaults, resolved configs and unsaved previews for the authoring UI."""

from typing import Any

from fastapi import APIRouter, Body

from app.questions import question_registry
from app.questions.models import QuestionSpec, QuestionType, ResolvedConfig
from app.questions.preview import QuestionPreview, preview
from app.schemas.projects import QuestionCreate, QuestionTypeInfo

router = APIRouter()


@router.get("/", response_model=list[QuestionTypeInfo])
def list_question_types():
    return [
        QuestionTypeInfo(
            question_type=question_type,
            default_config=question_registry.default_config(question_type),
            effective_config=question_registry.effective_config(question_type, None),
        )
        for question_type in QuestionType
    ]


@router.post("/{question_type}/resolve", response_model=ResolvedConfig)
def resolve_config(question_type: QuestionType, scale_config: dict[str, Any] | None = Body(None)):
    return question_registry.effective_config(question_type, scale_config)


@router.post("/preview", response_model=QuestionPreview)
def preview_draft(payload: QuestionCreate, index: int = 0):
    draft = QuestionSpec(
        question_text=payload.question_text,
        question_type=payload.question_type.value,
        scale_config=payload.scale_config,
    )
    return preview(question_registry, draft, index)
