"""Defense sessions and their per-student slots."""

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Text, Time
from sqlalchemy.orm import relationship

from app.db.session import Base


class DefenseSession(Base):
    """
    A scheduled defense day: date + reviewer + (department, class group, academic year).
    All four references are required on write; read paths still tolerate missing rows
    for legacy data.
    """

    __tablename__ = "defense_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_date = Column(Date, nullable=False)
    reviewer_id = Column(Integer, ForeignKey("reviewers.id", ondelete="RESTRICT"), nullable=False)
    department_id = Column(Integer, ForeignKey("departments.id", ondelete="RESTRICT"), nullable=False)
    class_group_id = Column(Integer, ForeignKey("class_groups.id", ondelete="RESTRICT"), nullable=False)
    academic_year_id = Column(Integer, ForeignKey("academic_years.id", ondelete="RESTRICT"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    reviewer = relationship("Reviewer", foreign_keys=[reviewer_id])
    department = relationship("Department", foreign_keys=[department_id])
    class_group = relationship("ClassGroup", foreign_keys=[class_group_id])
    academic_year = relationship("AcademicYear", foreign_keys=[academic_year_id])
    slots = relationship(
        "DefenseSlot",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="DefenseSlot.start_time",
    )


class DefenseSlot(Base):
    """One student's time range inside a session. slot_date is copied from the session on creation."""

    __tablename__ = "defense_slots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(Integer, ForeignKey("defense_sessions.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="RESTRICT"), nullable=False)
    slot_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    subject = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    session = relationship("DefenseSession", back_populates="slots")
    student = relationship("Student", foreign_keys=[student_id])
