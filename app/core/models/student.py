from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.session import Base


class Student(Base):
    """
    Student record. Distinct from the login Account: account_id links the two and
    may or may not equal id.
    Classification keys (class group, department, academic year) are all optional;
    legacy rows can carry any subset of them.
    """

    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True, unique=True)
    last_name = Column(String(100), nullable=False)
    first_name = Column(String(100), nullable=False)
    class_group_id = Column(Integer, ForeignKey("class_groups.id"), nullable=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True)
    academic_year_id = Column(Integer, ForeignKey("academic_years.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    account = relationship("Account", foreign_keys=[account_id])
    class_group = relationship("ClassGroup", foreign_keys=[class_group_id])
    department = relationship("Department", foreign_keys=[department_id])
    academic_year = relationship("AcademicYear", foreign_keys=[academic_year_id])

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
