# seed/seed_assessments.py
"""
Seed du questionnaire ICP + compte admin.

Contenu :
    1 User admin (SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD, tier Premium)
    1 Assessment  : Ideal Customer Profile (ICP) Readiness
    10 AssessmentQuestion (ordres 1..10, échelle yes/partially/no/dont-know)
    4 ScoreRange  : Ready to Grow / Needs Fine-Tuning / Needs Structuring / Needs Clarity

Idempotent : relancer le seed ne duplique rien (recherche par email / titre).

Usage :
    python -m app.seed.seed_assessments
"""
import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import AsyncSessionLocal
from app.core.security import hash_password
from app.content.icp import ICP_TITLE, ICP_DESCRIPTION, ICP_QUESTIONS
from app.engine.scoring.interpretation import DEFAULT_SCORE_RANGES
from app.shared.enums import UserRole, UserTier
from app.shared.models import User, Assessment, AssessmentQuestion, ScoreRange


async def seed_admin(db: AsyncSession) -> User:
    r = await db.execute(select(User).where(User.email == settings.SEED_ADMIN_EMAIL))
    admin = r.scalar_one_or_none()
    if admin:
        print(f"  · Admin déjà présent ({admin.email})")
        return admin

    admin = User(
        email=settings.SEED_ADMIN_EMAIL,
        first_name="Admin",
        hashed_password=hash_password(settings.SEED_ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        tier=UserTier.PREMIUM,
        is_active=True,
    )
    db.add(admin)
    await db.flush()
    print(f"  ✓ Admin créé ({admin.email})")
    return admin


async def seed_icp_assessment(db: AsyncSession) -> Assessment:
    r = await db.execute(select(Assessment).where(Assessment.title == ICP_TITLE))
    assessment = r.scalar_one_or_none()
    if assessment:
        print(f"  · Évaluation déjà présente (id={assessment.id})")
        return assessment

    assessment = Assessment(
        title=ICP_TITLE,
        description=ICP_DESCRIPTION,
        total_questions=len(ICP_QUESTIONS),
        is_active=True,
    )
    db.add(assessment)
    await db.flush()   # assessment.id disponible

    for order, text in enumerate(ICP_QUESTIONS, start=1):
        db.add(AssessmentQuestion(assessment_id=assessment.id, text=text, order=order))

    for score_range in DEFAULT_SCORE_RANGES:
        db.add(ScoreRange(assessment_id=assessment.id, **score_range))

    print(
        f"  ✓ Évaluation créée (id={assessment.id}, "
        f"{len(ICP_QUESTIONS)} questions, {len(DEFAULT_SCORE_RANGES)} plages)"
    )
    return assessment


async def seed(db: AsyncSession) -> None:
    await seed_admin(db)
    await seed_icp_assessment(db)
    await db.commit()
    print("✅ Seed terminé.")


async def main():
    async with AsyncSessionLocal() as db:
        await seed(db)


if __name__ == "__main__":
    asyncio.run(main())
