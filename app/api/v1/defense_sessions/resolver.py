"""
Resolve an identifier of unknown provenance to a Student or Reviewer row.

Callers (frontend, JWT "me" routes) sometimes send the person record id and sometimes
the id of the Account that owns it. Try order is fixed:
  1. person id (primary key)
  2. owning account id
Nothing is cached; every call reads the store again.
"""

import logging
from typing import Optional, Protocol, Type, TypeVar, Union

from app.core.enums import PersonRole
from app.core.exceptions import ReviewerNotFound, StudentNotFound
from app.core.models import Reviewer, Student

logger = logging.getLogger(__name__)

T = TypeVar("T")

_KINDS = {
    PersonRole.STUDENT: (Student, StudentNotFound),
    PersonRole.REVIEWER: (Reviewer, ReviewerNotFound),
}


class PersonStore(Protocol):
    async def get_by_id(self, kind: Type[T], entity_id: int) -> Optional[T]: ...

    async def get_by_account_id(self, kind: Type[T], account_id: int) -> Optional[T]: ...


async def resolve_person(
    store: PersonStore,
    role: PersonRole,
    candidate_id: Optional[int],
) -> Union[Student, Reviewer]:
    """Return the Student/Reviewer for candidate_id or raise StudentNotFound/ReviewerNotFound."""
    kind, error = _KINDS[role]
    if candidate_id is None:
        raise error(candidate_id)

    person = await store.get_by_id(kind, candidate_id)
    if person is not None:
        return person

    person = await store.get_by_account_id(kind, candidate_id)
    if person is not None:
        logger.debug("Resolved %s %s through account id %s", role.value, person.id, candidate_id)
        return person

    raise error(candidate_id)


async def resolve_by_account(
    store: PersonStore,
    role: PersonRole,
    account_id: int,
) -> Optional[Union[Student, Reviewer]]:
    """Account-id step on its own, for read paths that already tried the direct id with a query."""
    kind, _ = _KINDS[role]
    return await store.get_by_account_id(kind, account_id)
