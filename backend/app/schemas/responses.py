import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.questions.models import DecodedResponse


class SubmissionCreate(BaseModel):
    """One respondent's answers, keyed by question id."""

    session_id: str | None = Field(
        None,
        min_length=1,
        max_length=64,
        description="Caller-generated session identifier; generated when omitted",
    )
    answers: dict[uuid.UUID, Any] = Field(
        ...,
        description="Map of question id to the answer in its type's shape",
    )


class SubmissionOut(BaseModel):
    project_id: uuid.UUID
    session_id: str
    stored: int
    submitted_at: datetime


class ResponseRowOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    question_id: uuid.UUID
    question_text: str
    question_type: str
    response_text: str | None
    response_value: float | None
    response_data: Any = None
    decoded: DecodedResponse


class SessionOut(BaseModel):
    session_id: str
    submitted_at: datetime
    responses: list[ResponseRowOut]


class SessionListOut(BaseModel):
    items: list[SessionOut]
    total: int
    page: int
    page_size: int
