import os
from types import SimpleNamespace
from typing import AsyncGenerator

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.auth.models import Account
from app.core.models import AcademicYear, ClassGroup, Department, Reviewer, Student
from app.db.session import Base, get_db
from app.main import app


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture()
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory SQLite DB per test; overrides the FastAPI get_db dependency."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:

        async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
            yield session

        app.dependency_overrides[get_db] = override_get_db
        yield session

    app.dependency_overrides.pop(get_db, None)
    await engine.dispose()


@pytest.fixture()
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
async def world(db_session: AsyncSession) -> SimpleNamespace:
    """
    Reference data plus people whose record ids differ from their account ids:
      reviewer 1 (account 700), reviewer 2 (no account)
      student 10 (account 500, keys incomplete), student 11 (account 501, full keys),
      student 12 (account 10, i.e. its account id equals student 10's record id)
    """
    dept = Department(id=1, name="Computer Science")
    other_dept = Department(id=2, name="Management")
    group = ClassGroup(id=1, name="GI-2")
    year = AcademicYear(id=1, label="2024-2025")
    db_session.add_all([dept, other_dept, group, year])

    accounts = [
        Account(id=1, email="admin@school.edu", full_name="Admin", password_hash="x", role="ADMIN"),
        Account(id=700, email="rev@school.edu", full_name="Rev One", password_hash="x", role="REVIEWER"),
        Account(id=500, email="s10@school.edu", full_name="S Ten", password_hash="x", role="STUDENT"),
        Account(id=501, email="s11@school.edu", full_name="S Eleven", password_hash="x", role="STUDENT"),
        Account(id=10, email="s12@school.edu", full_name="S Twelve", password_hash="x", role="STUDENT"),
    ]
    db_session.add_all(accounts)
    await db_session.flush()

    reviewer = Reviewer(
        id=1, account_id=700, last_name="Alaoui", first_name="Nadia", specialty="Networks", department=dept
    )
    reviewer_no_account = Reviewer(id=2, last_name="Berrada", first_name="Omar", specialty=None)
    student = Student(id=10, account_id=500, last_name="Idrissi", first_name="Sara", department=dept)
    keyed_student = Student(
        id=11,
        account_id=501,
        last_name="Tazi",
        first_name="Yassine",
        department=dept,
        class_group=group,
        academic_year=year,
    )
    colliding_student = Student(id=12, account_id=10, last_name="Fassi", first_name="Amine")
    db_session.add_all([reviewer, reviewer_no_account, student, keyed_student, colliding_student])
    await db_session.commit()

    return SimpleNamespace(
        dept=dept,
        other_dept=other_dept,
        group=group,
        year=year,
        reviewer=reviewer,
        reviewer_no_account=reviewer_no_account,
        student=student,
        keyed_student=keyed_student,
        colliding_student=colliding_student,
    )
