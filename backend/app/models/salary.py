from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class SalaryByLocation(Base):
    """Average salary for a job role in one state."""

    __tablename__ = "salary_by_location"

    id = Column(Integer, primary_key=True)
    job_role_id = Column(Integer, ForeignKey("job_roles.id"), nullable=False, index=True)
    state = Column(String, nullable=False, index=True)
    salary = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    job_role = relationship("JobRole", back_populates="salaries")
