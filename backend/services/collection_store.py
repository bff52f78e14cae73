import logging

from sqlalchemy.orm import Session

from database import atomic
from errors import NotFoundError
from models import Collection
from models.collection import now_ms
from services.membership import MembershipSynchronizer
from services.validation import require_text

logger = logging.getLogger(__name__)


class CollectionStore:
    def __init__(self, db: Session):
        self.db = db
        self.memberships = MembershipSynchronizer(db)

    def create(
        self,
        owner_id: str,
        name: str | None,
        description: str | None = "",
        icon: str | None = None,
        color: str | None = None,
        is_shared: bool = False,
        sort_order: int | None = None,
    ) -> Collection:
        name = require_text(name, "name")
        collection = Collection(
            owner_id=owner_id,
            name=name,
            description=description or "",
            icon=icon or None,
            color=color or None,
            is_shared=bool(is_shared),
            # Creation time in ms keeps new collections ordered without a max() read
            sort_order=sort_order if sort_order is not None else now_ms(),
        )
        with atomic(self.db):
            self.db.add(collection)
        logger.info(f"Created collection {collection.id} for {owner_id}")
        return collection

    def get(self, owner_id: str, collection_id: str) -> Collection:
        return self.memberships.owned_collection(owner_id, collection_id)

    def list_by_owner(self, owner_id: str) -> list[Collection]:
        return (
            self.db.query(Collection)
            .filter(Collection.owner_id == owner_id)
            .order_by(Collection.sort_order.asc(), Collection.created_at.asc())
            .all()
        )

    def list_shared(self) -> list[Collection]:
        """Shared collections across all users."""
        return (
            self.db.query(Collection)
            .filter(Collection.is_shared.is_(True))
            .order_by(Collection.sort_order.asc(), Collection.created_at.asc())
            .all()
        )

    def update(self, owner_id: str, collection_id: str, changes: dict) -> Collection:
        fields = {}
        for field, value in changes.items():
            if field == "name":
                if value is not None:
                    fields["name"] = require_text(value, "name")
            elif field == "description":
                fields["description"] = value or ""
            elif field in ("icon", "color"):
                fields[field] = value
            elif field in ("is_shared", "sort_order"):
                if value is not None:
                    fields[field] = value

        with atomic(self.db):
            collection = self.memberships.owned_collection(owner_id, collection_id)
            for field, value in fields.items():
                setattr(collection, field, value)
        logger.info(f"Updated collection {collection_id}")
        return collection

    def reorder(self, owner_id: str, ordered_ids: list[str]) -> list[Collection]:
        with atomic(self.db):
            collections = {
                c.id: c
                for c in self.db.query(Collection)
                .filter(Collection.id.in_(ordered_ids), Collection.owner_id == owner_id)
                .all()
            }
            missing = [cid for cid in ordered_ids if cid not in collections]
            if missing:
                raise NotFoundError(f"Collection not found: {', '.join(missing)}")
            for position, collection_id in enumerate(ordered_ids):
                collections[collection_id].sort_order = position + 1
        logger.info(f"Reordered {len(ordered_ids)} collection(s) for {owner_id}")
        return self.list_by_owner(owner_id)

    def delete(self, owner_id: str, collection_id: str) -> None:
        self.memberships.teardown_collection(owner_id, collection_id)
