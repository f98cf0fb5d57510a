from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class Skill(Base):
    """A skill tracked across job roles."""

    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    category = Column(String, nullable=False)  # "Technical Skills", "Soft Skills", ...
    demand = Column(Integer, nullable=False)  # 1-100
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    role_links = relationship("JobRoleSkill", back_populates="skill")


class JobRoleSkill(Base):
    """Many-to-many link between job roles and skills, weighted by importance."""

    __tablename__ = "job_role_skills"

    id = Column(Integer, primary_key=True)
    job_role_id = Column(Integer, ForeignKey("job_roles.id"), nullable=False, index=True)
    skill_id = Column(Integer, ForeignKey("skills.id"), nullable=False)
    importance = Column(Integer, nullable=False)  # 1-100
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    job_role = relationship("JobRole", back_populates="skill_links")
    skill = relationship("Skill", back_populates="role_links")
