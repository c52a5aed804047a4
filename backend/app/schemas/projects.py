import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.questions.models import QuestionType, ResolvedConfig

# ---------------------------------------------------------------------------
# Question schemas
# ---------------------------------------------------------------------------


class QuestionCreate(BaseModel):
    """Single question in a project. ``scale_config`` keys use camelCase."""

    question_text: str = Field(..., min_length=1, max_length=2000)
    question_type: QuestionType
    scale_config: dict[str, Any] | None = Field(
        None,
        description="Type-specific configuration; omitted keys take the type's defaults",
    )


class QuestionUpdate(BaseModel):
    question_text: str | None = Field(None, min_length=1, max_length=2000)
    question_type: QuestionType | None = Field(
        None,
        description="Must match the existing type; question types cannot change",
    )
    scale_config: dict[str, Any] | None = None
    order_index: int | None = Field(None, ge=0)


class QuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    question_text: str
    question_type: str
    scale_config: dict[str, Any] | None
    order_index: int
    created_at: datetime


class QuestionDetailOut(QuestionOut):
    effective_config: ResolvedConfig


class QuestionTypeInfo(BaseModel):
    question_type: QuestionType
    default_config: dict[str, Any]
    effective_config: ResolvedConfig


# ---------------------------------------------------------------------------
# Project CRUD schemas
# ---------------------------------------------------------------------------


class ProjectCreate(BaseModel):
    owner_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    public_title: str | None = Field(None, max_length=255)
    public_description: str | None = None
    questions: list[QuestionCreate] = Field(default_factory=list)


class ProjectUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    public_title: str | None = Field(None, max_length=255)
    public_description: str | None = None
    is_active: bool | None = None


class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    owner_id: uuid.UUID
    name: str
    description: str | None
    public_title: str | None
    public_description: str | None
    link_unique: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ProjectDetailOut(ProjectOut):
    public_url: str
    questions: list[QuestionOut] = Field(default_factory=list)
    response_count: int = 0
    session_count: int = 0


class ProjectListOut(BaseModel):
    items: list[ProjectOut]
    total: int
    page: int
    page_size: int


# ---------------------------------------------------------------------------
# Public form schemas
# ---------------------------------------------------------------------------


class PublicQuestionOut(BaseModel):
    id: uuid.UUID
    question_text: str
    question_type: str
    order_index: int
    config: ResolvedConfig


class PublicFormOut(BaseModel):
    project_id: uuid.UUID
    title: str
    description: str | None
    questions: list[PublicQuestionOut]
