from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.session import Base


class Reviewer(Base):
    """Academic staff member supervising defense sessions. account_id links to the login Account."""

    __tablename__ = "reviewers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True, unique=True)
    last_name = Column(String(100), nullable=False)
    first_name = Column(String(100), nullable=False)
    specialty = Column(String(150), nullable=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    account = relationship("Account", foreign_keys=[account_id])
    department = relationship("Department", foreign_keys=[department_id])

    @property
    def full_name(self) -> str:
        return f"{self.last_name} {self.first_name}"
