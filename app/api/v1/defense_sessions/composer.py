"""Write paths: create a session, add a slot to it, edit a slot."""

import logging
from typing import Optional, Protocol, TypeVar

from app.core.enums import PersonRole
from app.core.exceptions import (
    DanglingReference,
    NotFoundAfterInsert,
    SessionNotFound,
    SlotNotFound,
    StudentRequired,
)
from app.core.models import DefenseSession, DefenseSlot

from .resolver import PersonStore, resolve_person
from .schemas import DefenseSessionCreate, DefenseSlotCreate, DefenseSlotUpdate

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ScheduleStore(PersonStore, Protocol):
    async def save(self, entity: T) -> T: ...

    async def get_session_by_id_with_associations(self, session_id: int) -> Optional[DefenseSession]: ...

    async def get_slot(self, slot_id: int) -> Optional[DefenseSlot]: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


_REQUIRED_ASSOCIATIONS = ("reviewer", "department", "class_group", "academic_year")


async def create_session(store: ScheduleStore, payload: DefenseSessionCreate) -> DefenseSession:
    """
    Insert a session and return it reloaded with all four associations.
    Insert and reload share one transaction: nothing is committed unless the reload
    sees the complete row.
    """
    reviewer = await resolve_person(store, PersonRole.REVIEWER, payload.reviewer_id)

    session = DefenseSession(
        session_date=payload.session_date,
        reviewer_id=reviewer.id,
        department_id=payload.department_id,
        class_group_id=payload.class_group_id,
        academic_year_id=payload.academic_year_id,
    )
    try:
        await store.save(session)
    except DanglingReference:
        await store.rollback()
        raise

    full = await store.get_session_by_id_with_associations(session.id)
    if full is None:
        await store.rollback()
        logger.error("Defense session %s vanished between insert and reload", session.id)
        raise NotFoundAfterInsert(session.id)
    missing = [name for name in _REQUIRED_ASSOCIATIONS if getattr(full, name) is None]
    if missing:
        # Backends without enforced foreign keys accept the insert; the reload exposes it.
        await store.rollback()
        raise DanglingReference(f"Unknown reference(s): {', '.join(missing)}")

    await store.commit()
    logger.info(
        "Created defense session %s on %s for reviewer %s",
        full.id,
        full.session_date.isoformat(),
        reviewer.id,
    )
    return full


async def add_slot(store: ScheduleStore, session_id: int, payload: DefenseSlotCreate) -> DefenseSlot:
    """Attach a student's slot to a session. The slot always takes the session's date."""
    if payload.student_id is None:
        raise StudentRequired()

    session = await store.get_by_id(DefenseSession, session_id)
    if session is None:
        raise SessionNotFound(session_id)

    student = await resolve_person(store, PersonRole.STUDENT, payload.student_id)

    slot = DefenseSlot(
        session_id=session.id,
        student_id=student.id,
        slot_date=session.session_date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        subject=payload.subject,
    )
    slot.student = student
    try:
        await store.save(slot)
    except DanglingReference:
        await store.rollback()
        raise
    await store.commit()
    logger.info("Added slot %s for student %s to defense session %s", slot.id, student.id, session.id)
    return slot


async def update_slot(store: ScheduleStore, slot_id: int, payload: DefenseSlotUpdate) -> DefenseSlot:
    """Overwrite subject and time range only; date, session and student stay as they are."""
    slot = await store.get_slot(slot_id)
    if slot is None:
        raise SlotNotFound(slot_id)

    # TODO: reject ranges overlapping another slot of the same session once the overlap rule is agreed.
    slot.subject = payload.subject
    slot.start_time = payload.start_time
    slot.end_time = payload.end_time
    await store.commit()
    logger.info("Updated defense slot %s", slot.id)
    return slot
