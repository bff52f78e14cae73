from datetime import datetime

from pydantic import BaseModel


class CollectionCreate(BaseModel):
    name: str
    description: str = ""
    icon: str | None = None
    color: str | None = None
    is_shared: bool = False
    sort_order: int | None = None


class CollectionUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    is_shared: bool | None = None
    sort_order: int | None = None


class CollectionOut(BaseModel):
    id: str
    owner_id: str
    name: str
    description: str = ""
    icon: str | None = None
    color: str | None = None
    is_shared: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CollectionReorder(BaseModel):
    ordered_ids: list[str]


class MembershipAdd(BaseModel):
    resource_id: str


class MembershipOut(BaseModel):
    collection_id: str
    resource_id: str
    added_at: datetime

    model_config = {"from_attributes": True}
