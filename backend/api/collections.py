from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from auth.deps import get_current_user_id
from database import get_db
from schemas import (
    CollectionCreate,
    CollectionUpdate,
    CollectionOut,
    CollectionReorder,
    MembershipAdd,
    MembershipOut,
)
from services.collection_store import CollectionStore
from services.membership import MembershipSynchronizer

router = APIRouter(prefix="/api/collections", tags=["collections"])


@router.get("", response_model=list[CollectionOut])
def list_collections(
    shared: bool = False,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    store = CollectionStore(db)
    if shared:
        return store.list_shared()
    return store.list_by_owner(user_id)


@router.post("", response_model=CollectionOut, status_code=status.HTTP_201_CREATED)
def create_collection(
    data: CollectionCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return CollectionStore(db).create(user_id, **data.model_dump())


# Declared before /{collection_id} so "reorder" is not taken as an id
@router.put("/reorder", response_model=list[CollectionOut])
def reorder_collections(
    data: CollectionReorder,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return CollectionStore(db).reorder(user_id, data.ordered_ids)


@router.get("/{collection_id}", response_model=CollectionOut)
def get_collection(
    collection_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return CollectionStore(db).get(user_id, collection_id)


@router.put("/{collection_id}", response_model=CollectionOut)
def update_collection(
    collection_id: str,
    data: CollectionUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return CollectionStore(db).update(
        user_id, collection_id, data.model_dump(exclude_unset=True)
    )


@router.delete("/{collection_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_collection(
    collection_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    CollectionStore(db).delete(user_id, collection_id)


# --- Memberships ---


@router.get("/{collection_id}/resources", response_model=list[MembershipOut])
def list_memberships(
    collection_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return MembershipSynchronizer(db).members(user_id, collection_id)


@router.post(
    "/{collection_id}/resources",
    response_model=MembershipOut,
    status_code=status.HTTP_201_CREATED,
)
def add_membership(
    collection_id: str,
    data: MembershipAdd,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    return MembershipSynchronizer(db).add(user_id, data.resource_id, collection_id)


@router.delete(
    "/{collection_id}/resources/{resource_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def remove_membership(
    collection_id: str,
    resource_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    MembershipSynchronizer(db).remove(user_id, resource_id, collection_id)
