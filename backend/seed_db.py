"""
Health Informatics Job Insights Database Seeder

Creates demo users and the job role catalog:
- One HR user and one job seeker
- Job roles with their BLS / O*NET occupation codes
- Skills, role-skill importance links and state salaries
"""

import sys
sys.path.insert(0, ".")

from app.db.session import SessionLocal, engine
from app.db.base import Base
from app.models import User, JobRole, Skill, JobRoleSkill, SalaryByLocation
from app.models.user import ROLE_HR, ROLE_JOB_SEEKER
from app.core.security import get_password_hash


DEMO_USERS = [
    {
        "username": "hr_demo",
        "password": "hrdemo123",
        "email": "hr@healthinfojobs.com",
        "role": ROLE_HR,
        "name": "Maria Lopez",
    },
    {
        "username": "seeker_demo",
        "password": "seeker123",
        "email": "seeker@example.com",
        "role": ROLE_JOB_SEEKER,
        "name": "Alex Kim",
    },
]

SKILLS = [
    ("Electronic Health Records (EHR)", "Technical Skills", 92),
    ("SQL/Databases", "Technical Skills", 85),
    ("Data Analysis", "Technical Skills", 78),
    ("HL7/FHIR", "Technical Skills", 65),
    ("Python/R", "Technical Skills", 75),
    ("Healthcare Regulations", "Industry Knowledge", 80),
    ("Clinical Terminology", "Industry Knowledge", 72),
    ("Communication", "Soft Skills", 88),
    ("Problem Solving", "Soft Skills", 82),
    ("Project Management", "Soft Skills", 70),
]

JOB_ROLES = [
    {
        "title": "Health Informatics Specialist",
        "description": "Designs and supports the information systems that store and exchange patient data.",
        "average_salary": 94830,
        "growth_rate": "17%",
        "requirements": "Bachelor's degree in health informatics or IT; EHR experience",
        "onet_code": "15-1211.01",
        "bls_code": "15-1211",
        "skills": {
            "Electronic Health Records (EHR)": 95,
            "HL7/FHIR": 80,
            "SQL/Databases": 75,
            "Communication": 70,
        },
        "salaries": {"CA": 109000, "NY": 107500, "TX": 86300, "FL": 91900, "MA": 104300},
    },
    {
        "title": "Health Data Scientist",
        "description": "Builds predictive models and analyses over clinical and claims data.",
        "average_salary": 100910,
        "growth_rate": "35%",
        "requirements": "Master's degree in data science, statistics or a related field",
        "onet_code": "15-2051.01",
        "bls_code": "15-2051",
        "skills": {
            "Python/R": 95,
            "Data Analysis": 92,
            "SQL/Databases": 85,
            "Problem Solving": 80,
        },
        "salaries": {"CA": 116000, "WA": 109000, "NY": 116000, "MA": 111000, "IL": 101900},
    },
    {
        "title": "Health Information Technologist",
        "description": "Maintains the quality, accuracy and security of health records and registries.",
        "average_salary": 55560,
        "growth_rate": "16%",
        "requirements": "Associate's or bachelor's degree; RHIT certification preferred",
        "onet_code": "29-9021.00",
        "bls_code": "29-9021",
        "skills": {
            "Clinical Terminology": 90,
            "Healthcare Regulations": 85,
            "Electronic Health Records (EHR)": 80,
        },
        "salaries": {"TX": 50600, "FL": 53900, "PA": 53900, "OH": 50000},
    },
    {
        "title": "Health IT Project Manager",
        "description": "Leads EHR implementations and health IT rollouts across care settings.",
        "average_salary": 101340,
        "growth_rate": "28%",
        "requirements": "Bachelor's degree; PMP certification; healthcare operations background",
        "onet_code": "11-9111.00",
        "bls_code": "11-9111",
        "skills": {
            "Project Management": 95,
            "Communication": 90,
            "Healthcare Regulations": 75,
        },
        "salaries": {"CA": 116500, "NY": 116500, "VA": 103400, "MN": 98300},
    },
    {
        "title": "Clinical Informatics Analyst",
        "description": "Bridges clinicians and IT teams to optimise clinical workflows in the EHR.",
        "average_salary": 82000,
        "growth_rate": "15%",
        "requirements": "Clinical background (RN or allied health) plus informatics training",
        "onet_code": None,
        "bls_code": None,
        "skills": {
            "Electronic Health Records (EHR)": 90,
            "Clinical Terminology": 85,
            "Communication": 80,
        },
        "salaries": {"NC": 75400, "GA": 73000, "AZ": 77900},
    },
]


def seed_database():
    """Seed the database with demo data."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        # Check if already seeded
        existing_hr = db.query(User).filter(User.username == DEMO_USERS[0]["username"]).first()
        if existing_hr:
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        # 1. Create demo users
        for user_data in DEMO_USERS:
            db.add(
                User(
                    username=user_data["username"],
                    hashed_password=get_password_hash(user_data["password"]),
                    email=user_data["email"],
                    role=user_data["role"],
                    name=user_data["name"],
                )
            )

        # 2. Create skills
        skills_by_name = {}
        for name, category, demand in SKILLS:
            skill = Skill(name=name, category=category, demand=demand)
            db.add(skill)
            skills_by_name[name] = skill
        db.flush()  # Get IDs

        # 3. Create job roles with skill links and state salaries
        for role_data in JOB_ROLES:
            job_role = JobRole(
                title=role_data["title"],
                description=role_data["description"],
                average_salary=role_data["average_salary"],
                growth_rate=role_data["growth_rate"],
                requirements=role_data["requirements"],
                onet_code=role_data["onet_code"],
                bls_code=role_data["bls_code"],
            )
            db.add(job_role)
            db.flush()

            for skill_name, importance in role_data["skills"].items():
                db.add(
                    JobRoleSkill(
                        job_role_id=job_role.id,
                        skill_id=skills_by_name[skill_name].id,
                        importance=importance,
                    )
                )

            for state, salary in role_data["salaries"].items():
                db.add(SalaryByLocation(job_role_id=job_role.id, state=state, salary=salary))

        # Commit all changes
        db.commit()

        print("✅ Database seeded successfully!")
        print("\n📋 Created Users:")
        for user_data in DEMO_USERS:
            print(f"   - {user_data['username']} (password: {user_data['password']}) [{user_data['role']}]")
        print(f"\n🎯 Catalog: {len(JOB_ROLES)} job roles, {len(SKILLS)} skills")

    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
