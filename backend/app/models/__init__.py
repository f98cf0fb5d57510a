from app.models.user import User
from app.models.job_role import JobRole
from app.models.skill import Skill, JobRoleSkill
from app.models.salary import SalaryByLocation
from app.models.insight import SavedInsight

__all__ = ["User", "JobRole", "Skill", "JobRoleSkill", "SalaryByLocation", "SavedInsight"]
