from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from app.db.session import Base


class AcademicYear(Base):
    """Academic year reference row. label is the display form, e.g. "2024-2025"."""

    __tablename__ = "academic_years"

    id = Column(Integer, primary_key=True, autoincrement=True)
    label = Column(String(50), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
