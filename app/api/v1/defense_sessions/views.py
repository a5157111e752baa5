"""
Entity -> response projection. Pure and synchronous: only associations already in
memory are read. An association that is null or was never loaded becomes null in the
response; nothing here can issue a query.
"""

from typing import Optional

from sqlalchemy import inspect

from app.core.models import DefenseSession, DefenseSlot

from .schemas import (
    AcademicYearSummary,
    ClassGroupSummary,
    DefenseSessionResponse,
    DefenseSlotResponse,
    DepartmentSummary,
    ReviewerSummary,
    StudentSlotSummary,
    StudentSummary,
)


def _loaded(obj, attr: str):
    """Relationship value if present in memory, else None. Never triggers a lazy load."""
    if obj is None:
        return None
    state = inspect(obj, raiseerr=False)
    if state is not None and attr in state.unloaded:
        return None
    return getattr(obj, attr, None)


def _department(dept) -> Optional[DepartmentSummary]:
    if dept is None:
        return None
    return DepartmentSummary(id=dept.id, name=dept.name)


def _reviewer(reviewer) -> Optional[ReviewerSummary]:
    if reviewer is None:
        return None
    return ReviewerSummary(
        id=reviewer.id,
        last_name=reviewer.last_name,
        first_name=reviewer.first_name,
        specialty=reviewer.specialty,
        department=_department(_loaded(reviewer, "department")),
    )


def to_response(session: DefenseSession) -> DefenseSessionResponse:
    class_group = _loaded(session, "class_group")
    academic_year = _loaded(session, "academic_year")
    return DefenseSessionResponse(
        id=session.id,
        session_date=session.session_date,
        reviewer=_reviewer(_loaded(session, "reviewer")),
        department=_department(_loaded(session, "department")),
        class_group=ClassGroupSummary(id=class_group.id, name=class_group.name) if class_group else None,
        academic_year=(
            AcademicYearSummary(id=academic_year.id, label=academic_year.label) if academic_year else None
        ),
    )


def slot_to_response(slot: DefenseSlot) -> DefenseSlotResponse:
    student = _loaded(slot, "student")
    return DefenseSlotResponse(
        id=slot.id,
        session_id=slot.session_id,
        slot_date=slot.slot_date,
        start_time=slot.start_time,
        end_time=slot.end_time,
        subject=slot.subject,
        student=(
            StudentSummary(id=student.id, last_name=student.last_name, first_name=student.first_name)
            if student
            else None
        ),
    )


def slot_to_student_summary(slot: DefenseSlot) -> StudentSlotSummary:
    return StudentSlotSummary(
        student_id=slot.student_id,
        slot_date=slot.slot_date,
        start_time=slot.start_time,
        end_time=slot.end_time,
        subject=slot.subject,
    )
