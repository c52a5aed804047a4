"""Response collection: encode a respondent's answers into a session batch, read sessions back decoded."""

import logging
import secrets
import string
import time
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import distinct, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.models.project import Project
from app.models.question import Question
from app.models.response import QuestionResponse
from app.questions import question_registry
from app.questions.models import DecodedResponse

logger = logging.getLogger(__name__)

_SESSION_ALPHABET = string.ascii_lowercase + string.digits


class SubmissionError(Exception):
    """Base exception for response submission failures."""


class UnknownQuestionError(SubmissionError):
    """Raised when answers reference questions outside the project."""

    def __init__(self, question_ids: list[uuid.UUID]) -> None:
        self.question_ids = question_ids
        super().__init__(f"Unknown question id(s): {', '.join(str(q) for q in question_ids)}")


class MissingAnswerError(SubmissionError):
    """Raised when required questions are left unanswered."""

    def __init__(self, questions: list[Question]) -> None:
        self.questions = questions
        texts = "; ".join(f"'{q.question_text}'" for q in questions)
        super().__init__(f"Required question(s) not answered: {texts}")


class SubmissionStorageError(SubmissionError):
    """Raised when the session batch could not be committed."""


class SessionExistsError(SubmissionError):
    """Raised when a caller-supplied session id already has stored responses."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session '{session_id}' was already submitted")


def generate_session_id() -> str:
    """Opaque id shared by all rows of one submission: ``<epoch ms>-<9 random chars>``."""
    suffix = "".join(secrets.choice(_SESSION_ALPHABET) for _ in range(9))
    return f"{int(time.time() * 1000)}-{suffix}"


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return not value
    return False


def build_session_rows(
    project: Project,
    answers: dict[uuid.UUID, Any],
    session_id: str,
    submitted_at: datetime,
) -> list[QuestionResponse]:
    """Encode ``answers`` into one row per answered question.

    Raises:
        UnknownQuestionError: If an answer key is not a question of the project.
        MissingAnswerError: If a question configured with ``isRequired`` has no answer.
        AnswerShapeError: If an answer does not match its question's type.
    """
    questions = {q.id: q for q in project.questions}
    unknown = [qid for qid in answers if qid not in questions]
    if unknown:
        raise UnknownQuestionError(unknown)

    rows: list[QuestionResponse] = []
    missing: list[Question] = []
    for question in sorted(questions.values(), key=lambda q: q.order_index):
        value = answers.get(question.id)
        if _is_blank(value):
            resolved = question_registry.effective_config(question.question_type, question.scale_config)
            if resolved.is_required:
                missing.append(question)
            continue

        encoded = question_registry.encode(question, value)
        rows.append(
            QuestionResponse(
                project_id=project.id,
                question_id=question.id,
                session_id=session_id,
                response_text=encoded.response_text,
                response_value=encoded.response_value,
                response_data=encoded.response_data,
                submitted_at=submitted_at,
            )
        )

    if missing:
        raise MissingAnswerError(missing)
    return rows


def submit_session(
    db: Session,
    project: Project,
    answers: dict[uuid.UUID, Any],
    session_id: str | None = None,
) -> tuple[str, list[QuestionResponse]]:
    """Store one respondent's answers as a single batch.

    Returns:
        The session id used and the stored rows.

    Raises:
        SessionExistsError: If ``session_id`` is given and already has stored rows.
        SubmissionStorageError: If the batch could not be committed. Nothing
            from the batch is kept in the session after a failure.
    """
    if session_id and session_exists(db, session_id):
        raise SessionExistsError(session_id)
    session_id = session_id or generate_session_id()
    submitted_at = datetime.now(timezone.utc)
    rows = build_session_rows(project, answers, session_id, submitted_at)

    db.add_all(rows)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to store session %s for project %s", session_id, project.id)
        raise SubmissionStorageError(f"Could not store responses: {exc.__class__.__name__}") from exc

    logger.info("Stored %d response(s) for project %s session %s", len(rows), project.id, session_id)
    return session_id, rows


def session_exists(db: Session, session_id: str) -> bool:
    return (
        db.execute(select(QuestionResponse.id).where(QuestionResponse.session_id == session_id).limit(1)).first()
        is not None
    )


def decode_row(row: QuestionResponse, question: Question) -> DecodedResponse:
    return question_registry.decode(row, question.question_type, question.scale_config)


def count_sessions(db: Session, project_id: uuid.UUID) -> int:
    return db.execute(
        select(func.count(distinct(QuestionResponse.session_id))).where(QuestionResponse.project_id == project_id)
    ).scalar_one()


def count_responses(db: Session, project_id: uuid.UUID) -> int:
    return db.execute(
        select(func.count()).select_from(QuestionResponse).where(QuestionResponse.project_id == project_id)
    ).scalar_one()


def list_sessions(
    db: Session,
    project_id: uuid.UUID,
    page: int = 1,
    page_size: int = 20,
) -> tuple[list[tuple[str, datetime, list[QuestionResponse]]], int]:
    """Page through a project's sessions, newest first.

    Returns:
        ``(sessions, total)`` where each session is ``(session_id,
        submitted_at, rows)`` with rows in question order.
    """
    total = count_sessions(db, project_id)

    latest = func.max(QuestionResponse.submitted_at).label("submitted_at")
    page_rows = db.execute(
        select(QuestionResponse.session_id, latest)
        .where(QuestionResponse.project_id == project_id)
        .group_by(QuestionResponse.session_id)
        .order_by(latest.desc(), QuestionResponse.session_id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    ).all()
    if not page_rows:
        return [], total

    session_ids = [r.session_id for r in page_rows]
    responses = (
        db.execute(
            select(QuestionResponse)
            .options(selectinload(QuestionResponse.question))
            .where(
                QuestionResponse.project_id == project_id,
                QuestionResponse.session_id.in_(session_ids),
            )
        )
        .scalars()
        .all()
    )

    by_session: dict[str, list[QuestionResponse]] = {sid: [] for sid in session_ids}
    for response in responses:
        by_session[response.session_id].append(response)

    sessions = []
    for r in page_rows:
        rows = sorted(by_session[r.session_id], key=lambda row: row.question.order_index)
        sessions.append((r.session_id, r.submitted_at, rows))
    return sessions, total
