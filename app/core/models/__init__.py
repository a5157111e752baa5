from app.auth.models import Account  # noqa: F401  (target of string relationships)
from app.core.models.academic_year import AcademicYear
from app.core.models.class_group import ClassGroup
from app.core.models.defense_session import DefenseSession, DefenseSlot
from app.core.models.department import Department
from app.core.models.reviewer import Reviewer
from app.core.models.student import Student

__all__ = [
    "AcademicYear",
    "ClassGroup",
    "DefenseSession",
    "DefenseSlot",
    "Department",
    "Reviewer",
    "Student",
]
