"""
SQLAlchemy-backed entity store for defense planning.

Every query that hands sessions to the view layer eager-loads the full association
graph (reviewer + its department, department, class group, academic year), so
views never trigger lazy loads on an AsyncSession.
"""

from typing import List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import DanglingReference
from app.core.models import DefenseSession, DefenseSlot, Reviewer, Student

T = TypeVar("T")


def _session_associations(path=None):
    """Loader options for a DefenseSession's four associations, optionally below another relationship."""
    if path is None:
        return [
            selectinload(DefenseSession.reviewer).selectinload(Reviewer.department),
            selectinload(DefenseSession.department),
            selectinload(DefenseSession.class_group),
            selectinload(DefenseSession.academic_year),
        ]
    return [
        path.selectinload(DefenseSession.reviewer).selectinload(Reviewer.department),
        path.selectinload(DefenseSession.department),
        path.selectinload(DefenseSession.class_group),
        path.selectinload(DefenseSession.academic_year),
    ]


class SqlAlchemyEntityStore:
    """Entity store over one AsyncSession. The caller owns the transaction boundary."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ----- point lookups -----

    async def get_by_id(self, kind: Type[T], entity_id: int) -> Optional[T]:
        return await self.db.get(kind, entity_id)

    async def get_by_account_id(self, kind: Type[T], account_id: int) -> Optional[T]:
        """Student/Reviewer owned by an Account. account_id is unique per kind."""
        result = await self.db.execute(select(kind).where(kind.account_id == account_id))
        return result.scalar_one_or_none()

    async def get_session_by_id_with_associations(self, session_id: int) -> Optional[DefenseSession]:
        # populate_existing: the just-flushed instance sits in the identity map with
        # unloaded relationships; force a fresh load of the whole graph.
        result = await self.db.execute(
            select(DefenseSession)
            .where(DefenseSession.id == session_id)
            .options(*_session_associations())
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_slot(self, slot_id: int) -> Optional[DefenseSlot]:
        result = await self.db.execute(
            select(DefenseSlot)
            .where(DefenseSlot.id == slot_id)
            .options(selectinload(DefenseSlot.student))
        )
        return result.scalar_one_or_none()

    # ----- listings -----

    async def list_sessions(self) -> List[DefenseSession]:
        result = await self.db.execute(
            select(DefenseSession)
            .options(*_session_associations())
            .order_by(DefenseSession.session_date, DefenseSession.id)
        )
        return list(result.scalars().all())

    async def list_sessions_by_reviewer(self, reviewer_id: int) -> List[DefenseSession]:
        result = await self.db.execute(
            select(DefenseSession)
            .where(DefenseSession.reviewer_id == reviewer_id)
            .options(*_session_associations())
            .order_by(DefenseSession.session_date, DefenseSession.id)
        )
        return list(result.scalars().all())

    async def list_sessions_by_keys(
        self,
        class_group_id: int,
        department_id: int,
        academic_year_id: int,
    ) -> List[DefenseSession]:
        result = await self.db.execute(
            select(DefenseSession)
            .where(
                DefenseSession.class_group_id == class_group_id,
                DefenseSession.department_id == department_id,
                DefenseSession.academic_year_id == academic_year_id,
            )
            .options(*_session_associations())
            .order_by(DefenseSession.session_date, DefenseSession.id)
        )
        return list(result.scalars().all())

    async def list_slots_by_student(self, student_id: int) -> List[DefenseSlot]:
        """Slots of a student with the parent session (and its associations) pre-loaded."""
        result = await self.db.execute(
            select(DefenseSlot)
            .where(DefenseSlot.student_id == student_id)
            .options(
                selectinload(DefenseSlot.student),
                *_session_associations(selectinload(DefenseSlot.session)),
            )
            .order_by(DefenseSlot.slot_date, DefenseSlot.start_time, DefenseSlot.id)
        )
        return list(result.scalars().all())

    async def list_slots_by_session(self, session_id: int) -> List[DefenseSlot]:
        result = await self.db.execute(
            select(DefenseSlot)
            .where(DefenseSlot.session_id == session_id)
            .options(selectinload(DefenseSlot.student))
            .order_by(DefenseSlot.start_time, DefenseSlot.id)
        )
        return list(result.scalars().all())

    # ----- writes -----

    async def save(self, entity: T) -> T:
        """
        Add and flush so the row gets its id. Foreign key rejections surface as
        DanglingReference; rolling back is left to the caller.
        """
        self.db.add(entity)
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise DanglingReference() from e
        return entity

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()
