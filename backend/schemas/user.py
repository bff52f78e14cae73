from datetime import datetime

from pydantic import BaseModel


class UserOut(BaseModel):
    id: str
    username: str
    email: str
    share_by_default: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProfileUpsert(BaseModel):
    username: str
    email: str
    share_by_default: bool = False


class ProfileUpdate(BaseModel):
    username: str | None = None
    share_by_default: bool | None = None


class UsernameCheck(BaseModel):
    username: str


class UsernameAvailability(BaseModel):
    available: bool
    error: str | None = None
