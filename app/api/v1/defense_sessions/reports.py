"""
Spreadsheet exports. Renderers only read already-assembled response models; all
lookups happen before they are called.
"""

import io
from typing import Iterable, List, Optional

from openpyxl import Workbook

from .schemas import DefenseSessionResponse, DefenseSlotResponse, ReviewerSummary

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

SESSIONS_SHEET_NAME = "Sessions"
SESSIONS_HEADERS = ("Date", "Department", "Class group", "Academic year", "Reviewer")
REVIEWER_SESSIONS_HEADERS = ("Id",) + SESSIONS_HEADERS
SLOTS_HEADERS = ("Id", "Date", "Start", "End", "Subject", "Student id", "Student name")


def _reviewer_name(reviewer: Optional[ReviewerSummary]) -> str:
    if reviewer is None:
        return ""
    return f"{reviewer.last_name} {reviewer.first_name}"


def _session_cells(s: DefenseSessionResponse) -> List[str]:
    return [
        s.session_date.isoformat(),
        s.department.name if s.department else "",
        s.class_group.name if s.class_group else "",
        s.academic_year.label if s.academic_year else "",
        _reviewer_name(s.reviewer),
    ]


def _to_bytes(wb: Workbook) -> bytes:
    bio = io.BytesIO()
    wb.save(bio)
    return bio.getvalue()


def render_sessions(sessions: Iterable[DefenseSessionResponse]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = SESSIONS_SHEET_NAME
    ws.append(list(SESSIONS_HEADERS))
    for s in sessions:
        ws.append(_session_cells(s))
    return _to_bytes(wb)


def render_reviewer_sessions(sessions: Iterable[DefenseSessionResponse]) -> bytes:
    """Same as render_sessions with the session id as first column."""
    wb = Workbook()
    ws = wb.active
    ws.title = SESSIONS_SHEET_NAME
    ws.append(list(REVIEWER_SESSIONS_HEADERS))
    for s in sessions:
        ws.append([s.id] + _session_cells(s))
    return _to_bytes(wb)


def render_session_slots(session_id: int, slots: Iterable[DefenseSlotResponse]) -> bytes:
    wb = Workbook()
    ws = wb.active
    # Excel caps sheet titles at 31 characters
    ws.title = f"Slots session {session_id}"[:31]
    ws.append(list(SLOTS_HEADERS))
    for d in slots:
        ws.append(
            [
                d.id,
                d.slot_date.isoformat(),
                d.start_time.strftime("%H:%M"),
                d.end_time.strftime("%H:%M"),
                d.subject or "",
                d.student.id if d.student else None,
                f"{d.student.first_name} {d.student.last_name}" if d.student else "",
            ]
        )
    return _to_bytes(wb)
