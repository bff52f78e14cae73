from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth.deps import get_current_user_id
from database import get_db
from schemas import ResourceOut
from services.feed import PublicFeed

router = APIRouter(prefix="/api/public-resources", tags=["public-resources"])


@router.get("", response_model=list[ResourceOut])
def list_public_feed(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return PublicFeed(db).list_public(user_id)


@router.post(
    "/{resource_id}/save",
    response_model=ResourceOut,
    status_code=status.HTTP_201_CREATED,
)
def save_from_feed(
    resource_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return PublicFeed(db).save_from_feed(user_id, resource_id)
