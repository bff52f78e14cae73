from .user import User
from .resource import Resource
from .collection import Collection
from .collection_resource import CollectionResource

__all__ = [
    "User",
    "Resource",
    "Collection",
    "CollectionResource",
]
