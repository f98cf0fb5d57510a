"""
Catalog API endpoints.

Unauthenticated reads over job roles, skills and state salaries.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.session import get_db
from app.models import JobRole, JobRoleSkill, SalaryByLocation, Skill

router = APIRouter()


# ============== Pydantic Schemas ==============


class JobRoleResponse(BaseModel):
    id: int
    title: str
    description: str
    average_salary: int
    growth_rate: str
    requirements: str
    onet_code: Optional[str] = None
    bls_code: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class SkillResponse(BaseModel):
    id: int
    name: str
    category: str
    demand: int
    created_at: datetime

    class Config:
        from_attributes = True


class RoleSkillResponse(SkillResponse):
    """A skill as required by one job role."""

    importance: int


class SalaryResponse(BaseModel):
    id: int
    job_role_id: int
    state: str
    salary: int
    created_at: datetime

    class Config:
        from_attributes = True


# ============== API Endpoints ==============


@router.get("/jobs", response_model=list[JobRoleResponse])
def list_job_roles(db: Session = Depends(get_db)):
    return db.query(JobRole).order_by(JobRole.id).all()


@router.get("/jobs/{job_id}", response_model=JobRoleResponse)
def get_job_role(job_id: int, db: Session = Depends(get_db)):
    job_role = db.query(JobRole).filter(JobRole.id == job_id).first()
    if not job_role:
        raise NotFoundError("Job role not found")
    return job_role


@router.get("/skills", response_model=list[SkillResponse])
def list_skills(db: Session = Depends(get_db)):
    return db.query(Skill).order_by(Skill.id).all()


@router.get("/skills/{job_id}", response_model=list[RoleSkillResponse])
def list_skills_for_job_role(job_id: int, db: Session = Depends(get_db)):
    """Skills linked to a job role, with the role-specific importance."""
    links = (
        db.query(JobRoleSkill, Skill)
        .join(Skill, Skill.id == JobRoleSkill.skill_id)
        .filter(JobRoleSkill.job_role_id == job_id)
        .order_by(JobRoleSkill.id)
        .all()
    )
    return [
        RoleSkillResponse(
            id=skill.id,
            name=skill.name,
            category=skill.category,
            demand=skill.demand,
            created_at=skill.created_at,
            importance=link.importance,
        )
        for link, skill in links
    ]


@router.get("/salary/job/{job_id}", response_model=list[SalaryResponse])
def list_salaries_for_job_role(job_id: int, db: Session = Depends(get_db)):
    return (
        db.query(SalaryByLocation)
        .filter(SalaryByLocation.job_role_id == job_id)
        .order_by(SalaryByLocation.id)
        .all()
    )


@router.get("/salary/{state}", response_model=list[SalaryResponse])
def list_salaries_for_state(state: str, db: Session = Depends(get_db)):
    return (
        db.query(SalaryByLocation)
        .filter(SalaryByLocation.state == state)
        .order_by(SalaryByLocation.id)
        .all()
    )
