from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth.deps import get_current_user_id
from database import get_db
from schemas import ResourceCreate, ResourceUpdate, ResourceOut
from services.resource_store import ResourceStore

router = APIRouter(prefix="/api/resources", tags=["resources"])


@router.get("", response_model=list[ResourceOut])
def list_resources(
    collection_id: str | None = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return ResourceStore(db).list_by_owner(user_id, collection_id=collection_id)


@router.post("", response_model=ResourceOut, status_code=status.HTTP_201_CREATED)
def create_resource(
    data: ResourceCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return ResourceStore(db).create(user_id, **data.model_dump())


@router.get("/{resource_id}", response_model=ResourceOut)
def get_resource(
    resource_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return ResourceStore(db).get(user_id, resource_id)


@router.put("/{resource_id}", response_model=ResourceOut)
def update_resource(
    resource_id: str,
    data: ResourceUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return ResourceStore(db).update(
        user_id, resource_id, data.model_dump(exclude_unset=True)
    )


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resource(
    resource_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    ResourceStore(db).delete(user_id, resource_id)
