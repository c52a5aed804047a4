"""Projects API — survey CRUD, question authoring, previews, responses and summary."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.project import Project
from app.models.question import Question
from app.questions import question_registry
from app.questions.preview import QuestionPreview, preview
from app.schemas.projects import (
    ProjectCreate,
    ProjectDetailOut,
    ProjectListOut,
    ProjectOut,
    ProjectUpdate,
    QuestionCreate,
    QuestionDetailOut,
    QuestionOut,
    QuestionUpdate,
)
from app.schemas.responses import ResponseRowOut, SessionListOut, SessionOut
from app.schemas.summary import SummaryReport
from app.services.projects import build_question, generate_link, next_order_index, public_url
from app.services.responses import count_responses, count_sessions, decode_row, list_sessions
from app.services.summary import SummaryError, summarize_project

router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_project_or_404(project_id: uuid.UUID, db: Session) -> Project:
    project = db.get(Project, project_id)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def _get_question_or_404(project: Project, question_id: uuid.UUID, db: Session) -> Question:
    question = db.get(Question, question_id)
    if question is None or question.project_id != project.id:
        raise HTTPException(status_code=404, detail="Question not found")
    return question


def _question_detail(question: Question) -> QuestionDetailOut:
    return QuestionDetailOut(
        **QuestionOut.model_validate(question).model_dump(),
        effective_config=question_registry.effective_config(question.question_type, question.scale_config),
    )


def _project_detail(project: Project, db: Session) -> ProjectDetailOut:
    return ProjectDetailOut(
        **ProjectOut.model_validate(project).model_dump(),
        public_url=public_url(project),
        questions=[QuestionOut.model_validate(q) for q in project.questions],
        response_count=count_responses(db, project.id),
        session_count=count_sessions(db, project.id),
    )


# ---------------------------------------------------------------------------
# Project CRUD
# ---------------------------------------------------------------------------


@router.post("/", response_model=ProjectDetailOut, status_code=201)
def create_project(payload: ProjectCreate, db: Session = Depends(get_db)):
    project = Project(
        owner_id=payload.owner_id,
        name=payload.name,
        description=payload.description,
        public_title=payload.public_title,
        public_description=payload.public_description,
        link_unique=generate_link(),
        is_active=True,
    )
    project.questions = [
        build_question(q.question_text, q.question_type, q.scale_config, order_index=i)
        for i, q in enumerate(payload.questions)
    ]
    db.add(project)
    db.commit()
    db.refresh(project)
    return _project_detail(project, db)


@router.get("/", response_model=ProjectListOut)
def list_projects(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    owner_id: uuid.UUID | None = Query(None),
    is_active: bool | None = Query(None),
    db: Session = Depends(get_db),
):
    query = select(Project)
    count_query = select(func.count()).select_from(Project)

    if owner_id is not None:
        query = query.where(Project.owner_id == owner_id)
        count_query = count_query.where(Project.owner_id == owner_id)
    if is_active is not None:
        query = query.where(Project.is_active == is_active)
        count_query = count_query.where(Project.is_active == is_active)

    total = db.execute(count_query).scalar_one()
    offset = (page - 1) * page_size
    projects = db.execute(query.order_by(Project.created_at.desc()).offset(offset).limit(page_size)).scalars().all()

    return ProjectListOut(items=projects, total=total, page=page, page_size=page_size)


@router.get("/{project_id}", response_model=ProjectDetailOut)
def get_project(project_id: uuid.UUID, db: Session = Depends(get_db)):
    return _project_detail(_get_project_or_404(project_id, db), db)


@router.put("/{project_id}", response_model=ProjectOut)
def update_project(project_id: uuid.UUID, payload: ProjectUpdate, db: Session = Depends(get_db)):
    project = _get_project_or_404(project_id, db)

    update_data = payload.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=422, detail="No fields to update")

    for field, value in update_data.items():
        setattr(project, field, value)

    db.commit()
    db.refresh(project)
    return project


@router.delete("/{project_id}", status_code=204)
def delete_project(project_id: uuid.UUID, db: Session = Depends(get_db)):
    project = _get_project_or_404(project_id, db)
    db.delete(project)
    db.commit()


# ---------------------------------------------------------------------------
# Questions
# ---------------------------------------------------------------------------


@router.get("/{project_id}/questions", response_model=list[QuestionDetailOut])
def list_questions(project_id: uuid.UUID, db: Session = Depends(get_db)):
    project = _get_project_or_404(project_id, db)
    return [_question_detail(q) for q in project.questions]


@router.post("/{project_id}/questions", response_model=QuestionDetailOut, status_code=201)
def add_question(project_id: uuid.UUID, payload: QuestionCreate, db: Session = Depends(get_db)):
    project = _get_project_or_404(project_id, db)
    question = build_question(
        payload.question_text,
        payload.question_type,
        payload.scale_config,
        order_index=next_order_index(project),
    )
    project.questions.append(question)
    db.commit()
    db.refresh(question)
    return _question_detail(question)


@router.put("/{project_id}/questions/{question_id}", response_model=QuestionDetailOut)
def update_question(
    project_id: uuid.UUID,
    question_id: uuid.UUID,
    payload: QuestionUpdate,
    db: Session = Depends(get_db),
):
    project = _get_project_or_404(project_id, db)
    question = _get_question_or_404(project, question_id, db)

    update_data = payload.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=422, detail="No fields to update")

    new_type = update_data.pop("question_type", None)
    if new_type is not None and new_type.value != question.question_type:
        raise HTTPException(status_code=409, detail="Question type cannot be changed")

    for field, value in update_data.items():
        setattr(question, field, value)

    db.commit()
    db.refresh(question)
    return _question_detail(question)


@router.delete("/{project_id}/questions/{question_id}", status_code=204)
def delete_question(project_id: uuid.UUID, question_id: uuid.UUID, db: Session = Depends(get_db)):
    project = _get_project_or_404(project_id, db)
    question = _get_question_or_404(project, question_id, db)
    db.delete(question)
    db.commit()


@router.get("/{project_id}/questions/{question_id}/preview", response_model=QuestionPreview)
def preview_question(project_id: uuid.UUID, question_id: uuid.UUID, db: Session = Depends(get_db)):
    project = _get_project_or_404(project_id, db)
    question = _get_question_or_404(project, question_id, db)
    position = [q.id for q in project.questions].index(question.id)
    return preview(question_registry, question, position)


# ---------------------------------------------------------------------------
# Responses and summary
# ---------------------------------------------------------------------------


@router.get("/{project_id}/responses", response_model=SessionListOut)
def list_project_responses(
    project_id: uuid.UUID,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    _get_project_or_404(project_id, db)
    sessions, total = list_sessions(db, project_id, page=page, page_size=page_size)

    items = [
        SessionOut(
            session_id=session_id,
            submitted_at=submitted_at,
            responses=[
                ResponseRowOut(
                    id=row.id,
                    question_id=row.question_id,
                    question_text=row.question.question_text,
                    question_type=row.question.question_type,
                    response_text=row.response_text,
                    response_value=row.response_value,
                    response_data=row.response_data,
                    decoded=decode_row(row, row.question),
                )
                for row in rows
            ],
        )
        for session_id, submitted_at, rows in sessions
    ]
    return SessionListOut(items=items, total=total, page=page, page_size=page_size)


@router.post("/{project_id}/summary", response_model=SummaryReport)
async def create_summary(project_id: uuid.UUID, db: Session = Depends(get_db)):
    project = _get_project_or_404(project_id, db)
    try:
        return await summarize_project(db, project)
    except SummaryError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc))
