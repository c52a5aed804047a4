import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import Float, ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class QuestionResponse(Base):
    """One answer to one question, stored in one of three columns by type.

        text                          -> response_text
        numeric scales, like_dislike  -> response_value
        single_choice                 -> response_text (option text) + response_value (index)
        multiple_choice, matrix       -> response_data

    Rows submitted together share ``session_id``; a session has no row of
    its own.
    """

    __tablename__ = "responses"
    __table_args__ = (
        Index("ix_responses_project_id", "project_id"),
        Index("ix_responses_question_id", "question_id"),
        Index("ix_responses_session_id", "session_id"),
        Index("ix_responses_project_submitted", "project_id", "submitted_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    question_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("questions.id", ondelete="CASCADE"), nullable=False
    )
    session_id: Mapped[str] = mapped_column(String(64), nullable=False)
    response_text: Mapped[str | None] = mapped_column(Text)
    response_value: Mapped[float | None] = mapped_column(Float)
    response_data: Mapped[Any] = mapped_column(JSONB, nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(server_default=func.now())

    project: Mapped["Project"] = relationship(back_populates="responses")
    question: Mapped["Question"] = relationship(back_populates="responses")

    def __repr__(self) -> str:
        return f"<QuestionResponse question={self.question_id} session={self.session_id}>"
