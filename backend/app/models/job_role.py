from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base


class JobRole(Base):
    """Catalog entry for a health-informatics job role."""

    __tablename__ = "job_roles"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    average_salary = Column(Integer, nullable=False)
    growth_rate = Column(String, nullable=False)  # e.g. "15%"
    requirements = Column(Text, nullable=False)

    # Upstream occupation codes used by the BLS / O*NET proxies
    onet_code = Column(String, nullable=True)
    bls_code = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    skill_links = relationship("JobRoleSkill", back_populates="job_role")
    salaries = relationship("SalaryByLocation", back_populates="job_role")
