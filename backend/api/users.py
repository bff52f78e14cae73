from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from auth.deps import get_current_user_id, get_optional_user_id
from database import get_db
from schemas import (
    UserOut,
    ProfileUpsert,
    ProfileUpdate,
    StatsOut,
    UsernameCheck,
    UsernameAvailability,
)
from services.profile import ProfileService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/check-username", response_model=UsernameAvailability)
def check_username(
    body: UsernameCheck,
    db: Session = Depends(get_db),
    user_id: str | None = Depends(get_optional_user_id),
):
    available, error = ProfileService(db).check_username(body.username, user_id)
    return UsernameAvailability(available=available, error=error)


@router.get("/me", response_model=UserOut)
def get_profile(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return ProfileService(db).get_profile(user_id)


@router.put("/me", response_model=UserOut)
def upsert_profile(
    body: ProfileUpsert,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Create the profile on first sign-in, or overwrite its fields."""
    return ProfileService(db).upsert_profile(
        user_id, body.username, body.email, body.share_by_default
    )


@router.patch("/me", response_model=UserOut)
def update_profile(
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return ProfileService(db).update_profile(
        user_id, body.model_dump(exclude_unset=True)
    )


@router.get("/me/stats", response_model=StatsOut)
def get_stats(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return ProfileService(db).stats(user_id)
