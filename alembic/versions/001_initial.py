"""Initial tables: users, lessons, lesson_lines, line_explanations.

Revision ID: 001
Revises:
Create Date: 2025-02-10

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "lessons",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("difficulty_level", sa.String(32), nullable=False, server_default="beginner"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_lessons_order_index"), "lessons", ["order_index"], unique=False)

    op.create_table(
        "lesson_lines",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("lesson_id", sa.Integer(), nullable=False),
        sa.Column("line_number", sa.Integer(), nullable=False),
        sa.Column("code_content", sa.Text(), nullable=False),
        sa.Column("line_type", sa.String(16), nullable=False, server_default="html"),
        sa.ForeignKeyConstraint(["lesson_id"], ["lessons.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("lesson_id", "line_number", name="uq_lesson_line_number"),
    )
    op.create_index(op.f("ix_lesson_lines_lesson_id"), "lesson_lines", ["lesson_id"], unique=False)

    op.create_table(
        "line_explanations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("lesson_line_id", sa.Integer(), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["lesson_line_id"], ["lesson_lines.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("lesson_line_id"),
    )


def downgrade() -> None:
    op.drop_table("line_explanations")
    op.drop_index(op.f("ix_lesson_lines_lesson_id"), table_name="lesson_lines")
    op.drop_table("lesson_lines")
    op.drop_index(op.f("ix_lessons_order_index"), table_name="lessons")
    op.drop_table("lessons")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
