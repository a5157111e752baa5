"""Unit tests for the session/slot visibility queries and their fallback tiers."""

import pytest

from app.api.v1.defense_sessions.finder import (
    dedupe_sessions,
    first_non_empty,
    list_sessions_for_reviewer,
    list_sessions_for_reviewer_account,
    list_sessions_for_student,
    list_sessions_for_student_account,
    list_slots_for_student,
    list_slots_for_student_account,
)
from app.core.exceptions import StudentNotFound

from tests.factories import FakeEntityStore, fake_session, fake_slot, person


def _store_with_split_slots() -> FakeEntityStore:
    """Student 10 (account 500, keys incomplete): two slots in session A, one in B."""
    session_a = fake_session(1)
    session_b = fake_session(2, department_id=2)
    return FakeEntityStore(
        students=[person(10, account_id=500, class_group_id=None, department_id=1, academic_year_id=1)],
        sessions=[session_a, session_b],
        slots=[
            fake_slot(100, 10, session_a),
            fake_slot(101, 10, session_b),
            fake_slot(102, 10, session_a),
        ],
    )


async def test_first_non_empty_stops_at_first_hit() -> None:
    called = []

    async def empty():
        called.append("empty")
        return []

    async def hit():
        called.append("hit")
        return [1]

    async def never():
        called.append("never")
        return [2]

    assert await first_non_empty(empty, hit, never) == [1]
    assert called == ["empty", "hit"]


async def test_first_non_empty_all_empty() -> None:
    async def empty():
        return []

    assert await first_non_empty(empty, empty) == []


def test_dedupe_sessions_keeps_first_seen_order() -> None:
    a, b, c = fake_session(1), fake_session(2), fake_session(3)

    assert [s.id for s in dedupe_sessions([b, a, b, None, c, a])] == [2, 1, 3]


async def test_slots_same_for_student_id_and_account_id() -> None:
    store = _store_with_split_slots()

    by_student = await list_slots_for_student(store, 10)
    by_account = await list_slots_for_student(store, 500)

    assert [s.id for s in by_student] == [100, 101, 102]
    assert [s.id for s in by_account] == [s.id for s in by_student]


async def test_slots_for_unknown_id_is_empty() -> None:
    store = _store_with_split_slots()

    assert await list_slots_for_student(store, 9999) == []


async def test_sessions_for_student_with_all_keys_uses_exact_match() -> None:
    match_1 = fake_session(1)
    match_2 = fake_session(3)
    other_year = fake_session(2, academic_year_id=2)
    store = FakeEntityStore(
        students=[person(11, account_id=501, class_group_id=1, department_id=1, academic_year_id=1)],
        sessions=[match_1, other_year, match_2],
        # slot in a non-matching session must not leak into the result
        slots=[fake_slot(100, 11, other_year)],
    )

    sessions = await list_sessions_for_student(store, 11)

    assert [s.id for s in sessions] == [1, 3]
    assert ("list_slots_by_student", 11) not in store.calls


async def test_sessions_for_student_falls_back_when_key_match_is_empty() -> None:
    session = fake_session(5, class_group_id=9)
    store = FakeEntityStore(
        students=[person(11, class_group_id=1, department_id=1, academic_year_id=1)],
        sessions=[session],
        slots=[fake_slot(100, 11, session)],
    )

    sessions = await list_sessions_for_student(store, 11)

    assert [s.id for s in sessions] == [5]
    assert ("list_sessions_by_keys", 1, 1, 1) in store.calls


async def test_sessions_for_student_with_missing_key_deduplicates_slot_sessions() -> None:
    store = _store_with_split_slots()

    sessions = await list_sessions_for_student(store, 500)

    assert [s.id for s in sessions] == [1, 2]
    assert not any(call[0] == "list_sessions_by_keys" for call in store.calls)


async def test_sessions_for_unknown_student_raises() -> None:
    store = _store_with_split_slots()

    with pytest.raises(StudentNotFound):
        await list_sessions_for_student(store, 12345)


async def test_sessions_for_reviewer_by_direct_id() -> None:
    store = FakeEntityStore(
        reviewers=[person(1, account_id=700)],
        sessions=[fake_session(1, reviewer_id=1), fake_session(2, reviewer_id=2)],
    )

    sessions = await list_sessions_for_reviewer(store, 1)

    assert [s.id for s in sessions] == [1]
    assert store.calls == [("list_sessions_by_reviewer", 1)]


async def test_sessions_for_reviewer_by_account_id() -> None:
    store = FakeEntityStore(
        reviewers=[person(1, account_id=700)],
        sessions=[fake_session(1, reviewer_id=1)],
    )

    sessions = await list_sessions_for_reviewer(store, 700)

    assert [s.id for s in sessions] == [1]


async def test_sessions_for_unknown_reviewer_is_empty() -> None:
    store = FakeEntityStore(reviewers=[person(1, account_id=700)])

    assert await list_sessions_for_reviewer(store, 1) == []
    assert await list_sessions_for_reviewer(store, 31337) == []


def _store_with_colliding_ids() -> FakeEntityStore:
    """Student 10 owns slots; student 12's account id is 10. Reviewer 7's account id is 1."""
    session_a = fake_session(1, reviewer_id=7)
    return FakeEntityStore(
        students=[
            person(10, account_id=500, class_group_id=None, department_id=1, academic_year_id=1),
            person(12, account_id=10, class_group_id=None, department_id=None, academic_year_id=None),
        ],
        reviewers=[person(7, account_id=None), person(9, account_id=7)],
        sessions=[session_a],
        slots=[fake_slot(100, 10, session_a)],
    )


async def test_account_keyed_queries_never_try_the_person_id() -> None:
    store = _store_with_colliding_ids()

    assert await list_slots_for_student_account(store, 10) == []
    assert await list_sessions_for_student_account(store, 10) == []
    assert await list_sessions_for_reviewer_account(store, 7) == []
    assert not any(call[0] == "get_by_id" for call in store.calls)
    assert not any(call == ("list_slots_by_student", 10) for call in store.calls)


async def test_account_keyed_queries_find_the_owner() -> None:
    store = _store_with_colliding_ids()

    assert [s.id for s in await list_slots_for_student_account(store, 500)] == [100]
    assert [s.id for s in await list_sessions_for_student_account(store, 500)] == [1]


async def test_sessions_for_unknown_student_account_raises() -> None:
    with pytest.raises(StudentNotFound) as exc_info:
        await list_sessions_for_student_account(_store_with_colliding_ids(), 999)

    assert exc_info.value.attempted_id == 999
