from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from . import composer, finder, reports
from .schemas import (
    DefenseSessionCreate,
    DefenseSessionResponse,
    DefenseSlotCreate,
    DefenseSlotResponse,
    DefenseSlotUpdate,
    StudentSlotSummary,
)
from .store import SqlAlchemyEntityStore
from .views import slot_to_response, slot_to_student_summary, to_response


async def create_session(
    db: AsyncSession,
    payload: DefenseSessionCreate,
) -> DefenseSessionResponse:
    session = await composer.create_session(SqlAlchemyEntityStore(db), payload)
    return to_response(session)


async def add_slot(
    db: AsyncSession,
    session_id: int,
    payload: DefenseSlotCreate,
) -> DefenseSlotResponse:
    slot = await composer.add_slot(SqlAlchemyEntityStore(db), session_id, payload)
    return slot_to_response(slot)


async def update_slot(
    db: AsyncSession,
    slot_id: int,
    payload: DefenseSlotUpdate,
) -> DefenseSlotResponse:
    slot = await composer.update_slot(SqlAlchemyEntityStore(db), slot_id, payload)
    return slot_to_response(slot)


async def list_all(db: AsyncSession) -> List[DefenseSessionResponse]:
    sessions = await SqlAlchemyEntityStore(db).list_sessions()
    return [to_response(s) for s in sessions]


async def list_for_student(db: AsyncSession, student_ref: int) -> List[DefenseSessionResponse]:
    """student_ref: student id or account id. Raises StudentNotFound."""
    sessions = await finder.list_sessions_for_student(SqlAlchemyEntityStore(db), student_ref)
    return [to_response(s) for s in sessions]


async def list_for_reviewer(db: AsyncSession, reviewer_ref: int) -> List[DefenseSessionResponse]:
    """reviewer_ref: reviewer id or account id."""
    sessions = await finder.list_sessions_for_reviewer(SqlAlchemyEntityStore(db), reviewer_ref)
    return [to_response(s) for s in sessions]


async def list_slots_for_student(db: AsyncSession, student_ref: int) -> List[StudentSlotSummary]:
    slots = await finder.list_slots_for_student(SqlAlchemyEntityStore(db), student_ref)
    return [slot_to_student_summary(d) for d in slots]


# ----- calling account -----


async def list_for_student_account(db: AsyncSession, account_id: int) -> List[DefenseSessionResponse]:
    sessions = await finder.list_sessions_for_student_account(SqlAlchemyEntityStore(db), account_id)
    return [to_response(s) for s in sessions]


async def list_for_reviewer_account(db: AsyncSession, account_id: int) -> List[DefenseSessionResponse]:
    sessions = await finder.list_sessions_for_reviewer_account(SqlAlchemyEntityStore(db), account_id)
    return [to_response(s) for s in sessions]


async def list_slots_for_student_account(db: AsyncSession, account_id: int) -> List[StudentSlotSummary]:
    slots = await finder.list_slots_for_student_account(SqlAlchemyEntityStore(db), account_id)
    return [slot_to_student_summary(d) for d in slots]


async def list_slots_for_session(db: AsyncSession, session_id: int) -> List[DefenseSlotResponse]:
    slots = await SqlAlchemyEntityStore(db).list_slots_by_session(session_id)
    return [slot_to_response(d) for d in slots]


# ----- exports -----


async def export_all(db: AsyncSession) -> bytes:
    return reports.render_sessions(await list_all(db))


async def export_for_reviewer(db: AsyncSession, reviewer_ref: int) -> bytes:
    return reports.render_reviewer_sessions(await list_for_reviewer(db, reviewer_ref))


async def export_slots_for_session(db: AsyncSession, session_id: int) -> bytes:
    return reports.render_session_slots(session_id, await list_slots_for_session(db, session_id))
