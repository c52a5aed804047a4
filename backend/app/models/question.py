import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class Question(Base):
    """One typed prompt within a project.

    ``scale_config`` is the open configuration object shared by all question
    types (camelCase keys such as ``csatScale``, ``options``, ``matrixRows``);
    only the keys relevant to ``question_type`` are read.
    """

    __tablename__ = "questions"
    __table_args__ = (
        Index("ix_questions_project_id", "project_id"),
        Index("ix_questions_project_order", "project_id", "order_index"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    question_type: Mapped[str] = mapped_column(String(32), nullable=False)
    scale_config: Mapped[dict | None] = mapped_column(JSONB)
    order_index: Mapped[int] = mapped_column(nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    project: Mapped["Project"] = relationship(back_populates="questions")
    responses: Mapped[list["QuestionResponse"]] = relationship(
        back_populates="question",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Question {self.order_index} {self.question_type}>"
