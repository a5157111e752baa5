import re
from datetime import date, datetime, time
from typing import Optional, Union

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_iso_date(v: Union[str, date]) -> date:
    """Accept only a calendar date in ISO form YYYY-MM-DD (no timestamps, no basic format)."""
    if isinstance(v, datetime):
        raise ValueError("session_date must be a date (YYYY-MM-DD), not a datetime")
    if isinstance(v, date):
        return v
    if isinstance(v, str) and _ISO_DATE.match(v.strip()):
        return date.fromisoformat(v.strip())
    raise ValueError("session_date must be an ISO calendar date, e.g. 2025-06-15")


def _parse_time_24(v: Union[str, time]) -> time:
    """Parse 24-hour time string (HH:MM or HH:MM:SS) to time."""
    if isinstance(v, time):
        return v
    if isinstance(v, str):
        v = v.strip()
        if len(v) == 5:  # HH:MM
            return datetime.strptime(v, "%H:%M").time()
        return datetime.strptime(v, "%H:%M:%S").time()
    raise ValueError("start_time/end_time must be 24-hour string (e.g. 09:00, 09:45) or time")


class _TimeRange(BaseModel):
    start_time: Union[str, time] = Field(..., description="24-hour format, e.g. 09:00")
    end_time: Union[str, time] = Field(..., description="24-hour format, e.g. 09:45")

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time(cls, v: Union[str, time]) -> time:
        return _parse_time_24(v)

    @model_validator(mode="after")
    def check_range(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


# ----- requests -----


class DefenseSessionCreate(BaseModel):
    """reviewer_id may be a reviewer id or the id of the reviewer's account."""

    session_date: date = Field(..., description="ISO date, e.g. 2025-06-15")
    reviewer_id: int
    department_id: int
    class_group_id: int
    academic_year_id: int

    @field_validator("session_date", mode="before")
    @classmethod
    def parse_date(cls, v: Union[str, date]) -> date:
        return _parse_iso_date(v)


class DefenseSlotCreate(_TimeRange):
    """
    student_id may be a student id or the id of the student's account.
    slot_date is accepted for compatibility but always replaced by the session date.
    """

    student_id: Optional[int] = None
    subject: Optional[str] = None
    slot_date: Optional[date] = None


class DefenseSlotUpdate(_TimeRange):
    """Replaces subject, start_time and end_time. Nothing else on the slot changes."""

    subject: Optional[str] = None


# ----- responses -----


class DepartmentSummary(BaseModel):
    id: int
    name: str


class ClassGroupSummary(BaseModel):
    id: int
    name: str


class AcademicYearSummary(BaseModel):
    id: int
    label: str


class ReviewerSummary(BaseModel):
    id: int
    last_name: str
    first_name: str
    specialty: Optional[str] = None
    department: Optional[DepartmentSummary] = None


class StudentSummary(BaseModel):
    id: int
    last_name: str
    first_name: str


class DefenseSessionResponse(BaseModel):
    """Associations are null when absent on the row (legacy data); they are never fetched on demand."""

    id: int
    session_date: date
    reviewer: Optional[ReviewerSummary] = None
    department: Optional[DepartmentSummary] = None
    class_group: Optional[ClassGroupSummary] = None
    academic_year: Optional[AcademicYearSummary] = None


class DefenseSlotResponse(BaseModel):
    id: int
    session_id: int
    slot_date: date
    start_time: time
    end_time: time
    subject: Optional[str] = None
    student: Optional[StudentSummary] = None

    class Config:
        from_attributes = True

    @field_serializer("start_time", "end_time")
    def serialize_time_24(self, t: time) -> str:
        """Output as 24-hour string HH:MM (e.g. 09:00, 09:45)."""
        return t.strftime("%H:%M")


class StudentSlotSummary(BaseModel):
    """Flat slot view for a student's own agenda."""

    student_id: Optional[int] = None
    slot_date: date
    start_time: time
    end_time: time
    subject: Optional[str] = None

    @field_serializer("start_time", "end_time")
    def serialize_time_24(self, t: time) -> str:
        return t.strftime("%H:%M")
