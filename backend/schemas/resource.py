from datetime import datetime

from pydantic import BaseModel


class ResourceCreate(BaseModel):
    title: str
    link: str
    tag: str
    note: str | None = None
    is_public: bool = False
    collection_ids: list[str] | None = None


class ResourceUpdate(BaseModel):
    title: str | None = None
    link: str | None = None
    tag: str | None = None
    note: str | None = None
    is_public: bool | None = None
    collection_ids: list[str] | None = None


class ResourceOut(BaseModel):
    id: str
    owner_id: str
    title: str
    link: str
    note: str | None = None
    tag: str
    is_public: bool
    collection_ids: list[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class StatsOut(BaseModel):
    total: int = 0
    public: int = 0
    private: int = 0
