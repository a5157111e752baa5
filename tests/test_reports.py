"""Spreadsheet exports, read back with openpyxl."""

import io
from datetime import date, time

from openpyxl import load_workbook

from app.api.v1.defense_sessions import reports
from app.api.v1.defense_sessions.schemas import (
    AcademicYearSummary,
    ClassGroupSummary,
    DefenseSessionResponse,
    DefenseSlotResponse,
    DepartmentSummary,
    ReviewerSummary,
    StudentSummary,
)


def _rows(content: bytes):
    wb = load_workbook(io.BytesIO(content))
    ws = wb.active
    return ws.title, [list(r) for r in ws.iter_rows(values_only=True)]


def _session(id: int, **overrides) -> DefenseSessionResponse:
    values = dict(
        id=id,
        session_date=date(2025, 6, 15),
        reviewer=ReviewerSummary(id=1, last_name="Alaoui", first_name="Nadia"),
        department=DepartmentSummary(id=1, name="Computer Science"),
        class_group=ClassGroupSummary(id=1, name="GI-2"),
        academic_year=AcademicYearSummary(id=1, label="2024-2025"),
    )
    values.update(overrides)
    return DefenseSessionResponse(**values)


def test_render_sessions() -> None:
    title, rows = _rows(reports.render_sessions([_session(1)]))

    assert title == "Sessions"
    assert rows[0] == ["Date", "Department", "Class group", "Academic year", "Reviewer"]
    assert rows[1] == ["2025-06-15", "Computer Science", "GI-2", "2024-2025", "Alaoui Nadia"]


def test_render_sessions_blanks_missing_associations() -> None:
    _, rows = _rows(reports.render_sessions([_session(1, reviewer=None, class_group=None)]))

    # openpyxl reads empty strings back as empty cells
    assert rows[1][2] in ("", None)
    assert rows[1][4] in ("", None)
    assert rows[1][1] == "Computer Science"


def test_render_reviewer_sessions_prepends_id() -> None:
    _, rows = _rows(reports.render_reviewer_sessions([_session(3), _session(5)]))

    assert rows[0][0] == "Id"
    assert [r[0] for r in rows[1:]] == [3, 5]
    assert rows[1][1:] == ["2025-06-15", "Computer Science", "GI-2", "2024-2025", "Alaoui Nadia"]


def test_render_session_slots() -> None:
    slots = [
        DefenseSlotResponse(
            id=9,
            session_id=4,
            slot_date=date(2025, 6, 15),
            start_time=time(9, 0),
            end_time=time(9, 30),
            subject="Edge caching",
            student=StudentSummary(id=10, last_name="Idrissi", first_name="Sara"),
        ),
        DefenseSlotResponse(
            id=10,
            session_id=4,
            slot_date=date(2025, 6, 15),
            start_time=time(9, 30),
            end_time=time(10, 0),
        ),
    ]

    title, rows = _rows(reports.render_session_slots(4, slots))

    assert title == "Slots session 4"
    assert rows[0] == ["Id", "Date", "Start", "End", "Subject", "Student id", "Student name"]
    assert rows[1] == [9, "2025-06-15", "09:00", "09:30", "Edge caching", 10, "Sara Idrissi"]
    assert rows[2][0] == 10
    assert rows[2][5] is None


def test_empty_export_has_only_headers() -> None:
    _, rows = _rows(reports.render_sessions([]))

    assert len(rows) == 1
