"""create companies, jobs and users tables

Revision ID: 0001_create_jobly_tables
Revises: None
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa


revision: str = "0001_create_jobly_tables"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("handle", sa.String(25), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False, unique=True),
        sa.Column("num_employees", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.CheckConstraint("num_employees >= 0"),
    )
    op.create_table(
        "jobs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("salary", sa.Integer(), nullable=True),
        sa.Column("equity", sa.Numeric(), nullable=True),
        sa.Column(
            "company_handle",
            sa.String(25),
            sa.ForeignKey("companies.handle", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.CheckConstraint("salary >= 0"),
        sa.CheckConstraint("equity <= 1.0"),
    )
    op.create_index("ix_jobs_company_handle", "jobs", ["company_handle"])
    op.create_table(
        "users",
        sa.Column("username", sa.String(25), primary_key=True),
        sa.Column("password", sa.Text(), nullable=False),
        sa.Column("first_name", sa.Text(), nullable=False),
        sa.Column("last_name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column(
            "is_admin", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
    )


def downgrade() -> None:
    op.drop_table("users")
    op.drop_index("ix_jobs_company_handle", table_name="jobs")
    op.drop_table("jobs")
    op.drop_table("companies")
