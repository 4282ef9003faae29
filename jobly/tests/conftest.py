"""Test configuration for API tests."""

import os

import pytest

# Provide default settings so tests can run without a full environment.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "x" * 32)
os.environ.setdefault("APP_ENV", "test")

import jobly.app.db as app_db  # noqa: E402
from jobly.app.auth import create_access_token, hash_password  # noqa: E402
from jobly.app.db import run_query  # noqa: E402
from jobly.app.models import Base  # noqa: E402

app_db.SessionLocal, app_db.engine = app_db.create_test_session()

USERS = [
    ("u1", "password1", "U1F", "U1L", "user1@user.com", False),
    ("u2", "password2", "U2F", "U2L", "user2@user.com", True),
    ("u3", "password3", "U3F", "U3L", "user3@user.com", False),
]


@pytest.fixture(scope="session")
def password_hashes() -> dict[str, str]:
    """Hash each seed password once; argon2 is deliberately slow."""
    return {username: hash_password(password) for username, password, *_ in USERS}


@pytest.fixture(autouse=True)
def job_ids(password_hashes) -> list[int]:
    """Recreate the schema, seed companies, users and jobs, return job ids."""
    Base.metadata.drop_all(bind=app_db.engine)
    Base.metadata.create_all(bind=app_db.engine)
    with app_db.SessionLocal() as session:
        for n in (1, 2, 3):
            run_query(
                session,
                """INSERT INTO companies (handle, name, num_employees, description, logo_url)
                VALUES ($1, $2, $3, $4, $5)""",
                [f"c{n}", f"C{n}", n, f"Desc{n}", f"http://c{n}.img"],
            )
        for username, _, first, last, email, is_admin in USERS:
            run_query(
                session,
                """INSERT INTO users (username, password, first_name, last_name, email, is_admin)
                VALUES ($1, $2, $3, $4, $5, $6)""",
                [username, password_hashes[username], first, last, email, is_admin],
            )
        ids = []
        for title, salary, equity, handle in [
            ("j1", 1000, 0.5, "c1"),
            ("j2", 2000, 0.6, "c1"),
            ("j3", 3000, 1.0, "c2"),
            ("j4", 3000, 0.0, "c1"),
        ]:
            rows = run_query(
                session,
                """INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING id""",
                [title, salary, equity, handle],
            )
            ids.append(rows[0]["id"])
        session.commit()
    return ids


@pytest.fixture
def session():
    with app_db.SessionLocal() as s:
        yield s


@pytest.fixture
def u1_token() -> str:
    return create_access_token("u1", is_admin=False)


@pytest.fixture
def admin_token() -> str:
    return create_access_token("u2", is_admin=True)
