from __future__ import annotations

"""Database models for the Jobly schema.

Queries are written as SQL text (see the repositories); the models declare
the tables so the schema can be created in tests and tracked by Alembic.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Company(Base):
    """Employer that posts jobs."""

    __tablename__ = "companies"
    __table_args__ = (CheckConstraint("num_employees >= 0"),)

    handle = Column(String(25), primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    num_employees = Column(Integer, nullable=True)
    description = Column(Text, nullable=False)
    logo_url = Column(Text, nullable=True)

    jobs = relationship("Job", back_populates="company", passive_deletes=True)


class Job(Base):
    """Opening posted by a company."""

    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("salary >= 0"),
        CheckConstraint("equity <= 1.0"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer, nullable=True)
    equity = Column(Numeric, nullable=True)
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    company = relationship("Company", back_populates="jobs")


class User(Base):
    """API account; ``is_admin`` grants write access to companies and jobs."""

    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, nullable=False, server_default=text("false"))


__all__ = ["Base", "Company", "Job", "User"]
