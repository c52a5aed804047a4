"""Public form API — anonymous form retrieval and session submission by link."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.project import Project
from app.questions import question_registry
from app.questions.exceptions import AnswerShapeError
from app.schemas.projects import PublicFormOut, PublicQuestionOut
from app.schemas.responses import SubmissionCreate, SubmissionOut
from app.services.responses import (
    MissingAnswerError,
    SessionExistsError,
    SubmissionStorageError,
    UnknownQuestionError,
    submit_session,
)

router = APIRouter()


def _get_active_project_or_404(link: str, db: Session) -> Project:
    project = db.execute(select(Project).where(Project.link_unique == link)).scalar_one_or_none()
    if project is None or not project.is_active:
        raise HTTPException(status_code=404, detail="Form not found")
    return project


@router.get("/{link}", response_model=PublicFormOut)
def get_public_form(link: str, db: Session = Depends(get_db)):
    project = _get_active_project_or_404(link, db)
    return PublicFormOut(
        project_id=project.id,
        title=project.public_title or project.name,
        description=project.public_description if project.public_description is not None else project.description,
        questions=[
            PublicQuestionOut(
                id=q.id,
                question_text=q.question_text,
                question_type=q.question_type,
                order_index=q.order_index,
                config=question_registry.effective_config(q.question_type, q.scale_config),
            )
            for q in project.questions
        ],
    )


@router.post("/{link}/responses", response_model=SubmissionOut, status_code=201)
def submit_public_response(link: str, payload: SubmissionCreate, db: Session = Depends(get_db)):
    project = _get_active_project_or_404(link, db)

    try:
        session_id, rows = submit_session(db, project, payload.answers, session_id=payload.session_id)
    except (UnknownQuestionError, MissingAnswerError, AnswerShapeError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except SessionExistsError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except SubmissionStorageError as exc:
        raise HTTPException(status_code=500, detail=str(exc))

    submitted_at = rows[0].submitted_at if rows else None
    if submitted_at is None:
        raise HTTPException(status_code=422, detail="No answers to submit")

    return SubmissionOut(
        project_id=project.id,
        session_id=session_id,
        stored=len(rows),
        submitted_at=submitted_at,
    )
