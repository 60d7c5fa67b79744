# modules/profile/router.py
from fastapi import APIRouter

from app.shared.deps import DbDep, UserDep
from app.modules.profile.service import ProfileService
from app.modules.profile.schemas import ProfileOut, ProfileUpdateIn

router = APIRouter(prefix="/profile", tags=["Profile"])
service = ProfileService()


@router.get("/me", response_model=ProfileOut)
async def get_my_profile(db: DbDep, current_user: UserDep):
    return await service.get_profile(db, current_user)


@router.patch("/me", response_model=ProfileOut)
async def update_my_profile(payload: ProfileUpdateIn, db: DbDep, current_user: UserDep):
    return await service.update_profile(
        db, current_user, payload.model_dump(exclude_unset=True)
    )
