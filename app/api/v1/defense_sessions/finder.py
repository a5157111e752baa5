"""
Read paths: which sessions/slots a student or reviewer can see.

Each tier is an independent coroutine function from keys to a list; tiers are chained
with first_non_empty so that a later tier only runs when every earlier one came back
empty.
"""

import logging
from typing import Awaitable, Callable, List, Optional, Protocol, Sequence, TypeVar

from app.core.enums import PersonRole
from app.core.exceptions import StudentNotFound
from app.core.models import DefenseSession, DefenseSlot, Student

from .resolver import PersonStore, resolve_by_account, resolve_person

logger = logging.getLogger(__name__)

T = TypeVar("T")

Tier = Callable[[], Awaitable[List[T]]]


class SessionQueries(PersonStore, Protocol):
    async def list_slots_by_student(self, student_id: int) -> List[DefenseSlot]: ...

    async def list_sessions_by_reviewer(self, reviewer_id: int) -> List[DefenseSession]: ...

    async def list_sessions_by_keys(
        self, class_group_id: int, department_id: int, academic_year_id: int
    ) -> List[DefenseSession]: ...


async def first_non_empty(*tiers: Tier) -> List[T]:
    """Run tiers in order and return the first non-empty result (or [] if all are empty)."""
    for tier in tiers:
        result = await tier()
        if result:
            return result
    return []


def dedupe_sessions(sessions: Sequence[Optional[DefenseSession]]) -> List[DefenseSession]:
    """Drop repeated sessions by identity, keeping first-seen order."""
    seen = {}
    for s in sessions:
        if s is not None and s.id not in seen:
            seen[s.id] = s
    return list(seen.values())


# ----- tiers -----


async def slots_by_student_id(store: SessionQueries, student_id: int) -> List[DefenseSlot]:
    return await store.list_slots_by_student(student_id)


async def slots_by_account_id(store: SessionQueries, account_id: int) -> List[DefenseSlot]:
    student = await resolve_by_account(store, PersonRole.STUDENT, account_id)
    if student is None:
        logger.warning("No student owns account %s; listing no slots", account_id)
        return []
    return await store.list_slots_by_student(student.id)


async def sessions_by_classification(store: SessionQueries, student: Student) -> List[DefenseSession]:
    """Exact (class group, department, academic year) match; empty when any key is missing."""
    keys = (student.class_group_id, student.department_id, student.academic_year_id)
    if any(k is None for k in keys):
        return []
    return await store.list_sessions_by_keys(*keys)


async def sessions_from_slots(store: SessionQueries, student: Student) -> List[DefenseSession]:
    slots = await store.list_slots_by_student(student.id)
    return dedupe_sessions([slot.session for slot in slots])


async def sessions_by_reviewer_id(store: SessionQueries, reviewer_id: int) -> List[DefenseSession]:
    return await store.list_sessions_by_reviewer(reviewer_id)


async def sessions_by_reviewer_account(store: SessionQueries, account_id: int) -> List[DefenseSession]:
    reviewer = await resolve_by_account(store, PersonRole.REVIEWER, account_id)
    if reviewer is None:
        logger.warning("No reviewer owns account %s; listing no sessions", account_id)
        return []
    return await store.list_sessions_by_reviewer(reviewer.id)


# ----- queries -----


async def list_slots_for_student(store: SessionQueries, candidate_id: int) -> List[DefenseSlot]:
    """Slots of a student given a student id or account id. Never raises for unknown ids."""
    return await first_non_empty(
        lambda: slots_by_student_id(store, candidate_id),
        lambda: slots_by_account_id(store, candidate_id),
    )


async def list_sessions_for_student(store: SessionQueries, candidate_id: int) -> List[DefenseSession]:
    """
    Sessions a student should see. Raises StudentNotFound when the id resolves to nobody.

    Classification keys on Student rows are not always consistent, while slot ->
    session links are, hence the fallback to the student's own slots.
    """
    student = await resolve_person(store, PersonRole.STUDENT, candidate_id)
    return await first_non_empty(
        lambda: sessions_by_classification(store, student),
        lambda: sessions_from_slots(store, student),
    )


async def list_sessions_for_reviewer(store: SessionQueries, candidate_id: int) -> List[DefenseSession]:
    """Sessions supervised by a reviewer given a reviewer id or account id. Empty, never an error."""
    return await first_non_empty(
        lambda: sessions_by_reviewer_id(store, candidate_id),
        lambda: sessions_by_reviewer_account(store, candidate_id),
    )


# ----- account-keyed queries -----
# The caller's own account id is never an ambiguous reference, so these skip the
# person-id step entirely.


async def list_slots_for_student_account(store: SessionQueries, account_id: int) -> List[DefenseSlot]:
    return await slots_by_account_id(store, account_id)


async def list_sessions_for_student_account(store: SessionQueries, account_id: int) -> List[DefenseSession]:
    """Same tiers as list_sessions_for_student for the student owning account_id."""
    student = await resolve_by_account(store, PersonRole.STUDENT, account_id)
    if student is None:
        raise StudentNotFound(account_id, f"No student owns account {account_id}")
    return await first_non_empty(
        lambda: sessions_by_classification(store, student),
        lambda: sessions_from_slots(store, student),
    )


async def list_sessions_for_reviewer_account(store: SessionQueries, account_id: int) -> List[DefenseSession]:
    return await sessions_by_reviewer_account(store, account_id)
