"""create projects, questions and responses tables

Revision ID: c7d1e2f3a4b5
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "c7d1e2f3a4b5"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("public_title", sa.String(length=255), nullable=True),
        sa.Column("public_description", sa.Text(), nullable=True),
        sa.Column("link_unique", sa.String(length=64), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default="true", nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_owner_id", "projects", ["owner_id"], unique=False)
    op.create_index("ix_projects_link_unique", "projects", ["link_unique"], unique=True)

    op.create_table(
        "questions",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("project_id", sa.UUID(), nullable=False),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("question_type", sa.String(length=32), nullable=False),
        sa.Column("scale_config", postgresql.JSONB(), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_questions_project_id", "questions", ["project_id"], unique=False)
    op.create_index("ix_questions_project_order", "questions", ["project_id", "order_index"], unique=False)

    op.create_table(
        "responses",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("project_id", sa.UUID(), nullable=False),
        sa.Column("question_id", sa.UUID(), nullable=False),
        sa.Column("session_id", sa.String(length=64), nullable=False),
        sa.Column("response_text", sa.Text(), nullable=True),
        sa.Column("response_value", sa.Float(), nullable=True),
        sa.Column("response_data", postgresql.JSONB(), nullable=True),
        sa.Column("submitted_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_responses_project_id", "responses", ["project_id"], unique=False)
    op.create_index("ix_responses_question_id", "responses", ["question_id"], unique=False)
    op.create_index("ix_responses_session_id", "responses", ["session_id"], unique=False)
    op.create_index(
        "ix_responses_project_submitted", "responses", ["project_id", "submitted_at"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_responses_project_submitted", table_name="responses")
    op.drop_index("ix_responses_session_id", table_name="responses")
    op.drop_index("ix_responses_question_id", table_name="responses")
    op.drop_index("ix_responses_project_id", table_name="responses")
    op.drop_table("responses")

    op.drop_index("ix_questions_project_order", table_name="questions")
    op.drop_index("ix_questions_project_id", table_name="questions")
    op.drop_table("questions")

    op.drop_index("ix_projects_link_unique", table_name="projects")
    op.drop_index("ix_projects_owner_id", table_name="projects")
    op.drop_table("projects")
