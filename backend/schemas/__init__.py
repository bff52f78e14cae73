from .user import UserOut, ProfileUpsert, ProfileUpdate, UsernameCheck, UsernameAvailability
from .resource import ResourceCreate, ResourceUpdate, ResourceOut, StatsOut
from .collection import (
    CollectionCreate,
    CollectionUpdate,
    CollectionOut,
    CollectionReorder,
    MembershipAdd,
    MembershipOut,
)
from .enrich import EnrichRequest, EnrichOut

__all__ = [
    "UserOut",
    "ProfileUpsert",
    "ProfileUpdate",
    "UsernameCheck",
    "UsernameAvailability",
    "ResourceCreate",
    "ResourceUpdate",
    "ResourceOut",
    "StatsOut",
    "CollectionCreate",
    "CollectionUpdate",
    "CollectionOut",
    "CollectionReorder",
    "MembershipAdd",
    "MembershipOut",
    "EnrichRequest",
    "EnrichOut",
]
