from app.core.database import Base
from app.models import Project, Question, QuestionResponse

EXPECTED_TABLES = {"projects", "questions", "responses"}


def test_all_tables_registered():
    registered = set(Base.metadata.tables.keys())
    assert EXPECTED_TABLES.issubset(registered), (
        f"Missing tables: {EXPECTED_TABLES - registered}"
    )


def test_project_columns():
    cols = {c.name for c in Project.__table__.columns}
    assert cols == {
        "id", "owner_id", "name", "description", "public_title", "public_description",
        "link_unique", "is_active", "created_at", "updated_at",
    }


def test_question_columns():
    cols = {c.name for c in Question.__table__.columns}
    assert cols == {
        "id", "project_id", "question_text", "question_type", "scale_config",
        "order_index", "created_at",
    }


def test_response_columns():
    cols = {c.name for c in QuestionResponse.__table__.columns}
    assert cols == {
        "id", "project_id", "question_id", "session_id", "response_text",
        "response_value", "response_data", "submitted_at",
    }
