"""
Membership synchronization between resources and collections.

The relationship is stored twice: each Resource keeps the ids of the
collections it belongs to in ``collection_ids``, and each membership is
also a ``CollectionResource`` row keyed by (collection_id, resource_id).
Every operation here writes both sides inside one ``atomic`` unit, so a
caller only ever observes a pair as linked or unlinked.

The helpers ``require_collections`` and ``apply`` do not commit; they are
meant to run inside a unit opened by the caller (resource create/update).
"""

import logging
from datetime import datetime, timezone
from typing import Iterable

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from database import atomic
from errors import ConflictError, NotFoundError
from models import Collection, CollectionResource, Resource

logger = logging.getLogger(__name__)

STRIP_ATTEMPTS = 3


class MembershipSynchronizer:
    def __init__(self, db: Session):
        self.db = db

    # --- lookups ---

    def owned_resource(self, owner_id: str, resource_id: str) -> Resource:
        resource = self.db.get(Resource, resource_id)
        if resource is None or resource.owner_id != owner_id:
            raise NotFoundError("Resource not found")
        return resource

    def owned_collection(self, owner_id: str, collection_id: str) -> Collection:
        collection = self.db.get(Collection, collection_id)
        if collection is None or collection.owner_id != owner_id:
            raise NotFoundError("Collection not found")
        return collection

    def require_collections(self, owner_id: str, collection_ids: Iterable[str]) -> set[str]:
        """Return the ids as a set, or raise if any is not a collection of owner_id."""
        wanted = set(collection_ids)
        if not wanted:
            return wanted
        rows = (
            self.db.query(Collection.id)
            .filter(Collection.id.in_(wanted), Collection.owner_id == owner_id)
            .all()
        )
        missing = wanted - {row.id for row in rows}
        if missing:
            raise NotFoundError(f"Collection not found: {', '.join(sorted(missing))}")
        return wanted

    # --- diff application (no commit) ---

    def _put_membership(
        self, collection_id: str, resource_id: str, added_at: datetime
    ) -> CollectionResource:
        membership = self.db.get(CollectionResource, (collection_id, resource_id))
        if membership is None:
            membership = CollectionResource(
                collection_id=collection_id, resource_id=resource_id
            )
            self.db.add(membership)
        membership.added_at = added_at
        return membership

    def _drop_membership(self, collection_id: str, resource_id: str) -> None:
        membership = self.db.get(CollectionResource, (collection_id, resource_id))
        if membership is not None:
            self.db.delete(membership)

    def apply(self, resource: Resource, desired: set[str]) -> tuple[set[str], set[str]]:
        """
        Move resource's memberships from its current collection_ids to desired.

        Ids present on both sides are left alone, so their added_at is kept.
        Returns (added, removed).
        """
        current = set(resource.collection_ids or [])
        to_add = desired - current
        to_remove = current - desired
        now = datetime.now(timezone.utc)

        for collection_id in sorted(to_add):
            self._put_membership(collection_id, resource.id, now)
        for collection_id in sorted(to_remove):
            self._drop_membership(collection_id, resource.id)
        if to_add or to_remove:
            resource.collection_ids = sorted(desired)
        return to_add, to_remove

    # --- entry points (one atomic unit each) ---

    def add(self, owner_id: str, resource_id: str, collection_id: str) -> CollectionResource:
        with atomic(self.db):
            self.owned_collection(owner_id, collection_id)
            resource = self.owned_resource(owner_id, resource_id)
            membership = self._put_membership(
                collection_id, resource.id, datetime.now(timezone.utc)
            )
            if collection_id not in (resource.collection_ids or []):
                resource.collection_ids = sorted(
                    [*(resource.collection_ids or []), collection_id]
                )
        logger.info(f"Linked resource {resource_id} to collection {collection_id}")
        return membership

    def remove(self, owner_id: str, resource_id: str, collection_id: str) -> None:
        with atomic(self.db):
            collection = self.db.get(Collection, collection_id)
            if collection is not None and collection.owner_id != owner_id:
                raise NotFoundError("Collection not found")
            resource = self.owned_resource(owner_id, resource_id)
            self._drop_membership(collection_id, resource.id)
            if collection_id in (resource.collection_ids or []):
                resource.collection_ids = [
                    cid for cid in resource.collection_ids if cid != collection_id
                ]
        logger.info(f"Unlinked resource {resource_id} from collection {collection_id}")

    def reconcile(
        self, owner_id: str, resource_id: str, desired_collection_ids: Iterable[str]
    ) -> Resource:
        with atomic(self.db):
            resource = self.owned_resource(owner_id, resource_id)
            desired = self.require_collections(owner_id, desired_collection_ids)
            added, removed = self.apply(resource, desired)
        logger.info(
            f"Reconciled resource {resource_id}: +{len(added)} -{len(removed)} collections"
        )
        return resource

    def link_new_resource(self, resource: Resource, desired: set[str]) -> None:
        """Insert a new resource together with its initial memberships (no commit)."""
        resource.collection_ids = []
        self.db.add(resource)
        # Parent row must exist before membership rows reference it
        self.db.flush()
        self.apply(resource, desired)

    def teardown_resource(self, owner_id: str, resource_id: str) -> None:
        with atomic(self.db):
            resource = self.owned_resource(owner_id, resource_id)
            memberships = (
                self.db.query(CollectionResource)
                .filter(CollectionResource.resource_id == resource.id)
                .all()
            )
            for membership in memberships:
                self.db.delete(membership)
            self.db.flush()
            self.db.delete(resource)
        logger.info(
            f"Deleted resource {resource_id} and {len(memberships)} membership(s)"
        )

    def _strip_collection_id(self, resource_id: str, collection_id: str) -> None:
        """
        Remove one id from a resource's collection_ids and write nothing else.

        The write is a compare-and-set on the version counter against a fresh
        read, retried when another writer commits first. Concurrent edits to
        other fields of the resource therefore never fail a collection delete.
        """
        for _ in range(STRIP_ATTEMPTS):
            row = self.db.execute(
                select(Resource.collection_ids, Resource.version).where(
                    Resource.id == resource_id
                )
            ).one_or_none()
            if row is None or collection_id not in (row.collection_ids or []):
                return
            result = self.db.execute(
                update(Resource)
                .where(Resource.id == resource_id, Resource.version == row.version)
                .values(
                    collection_ids=[c for c in row.collection_ids if c != collection_id],
                    version=row.version + 1,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 1:
                return
        raise ConflictError("The record was modified concurrently; re-read and retry")

    def teardown_collection(self, owner_id: str, collection_id: str) -> None:
        with atomic(self.db):
            collection = self.owned_collection(owner_id, collection_id)
            memberships = list(collection.memberships)
            for membership in memberships:
                self._strip_collection_id(membership.resource_id, collection_id)
            # delete-orphan cascade removes the membership rows with the collection.
            # A membership committed by someone else since the read above fails
            # the foreign key and aborts the whole unit.
            self.db.delete(collection)
        logger.info(
            f"Deleted collection {collection_id} and {len(memberships)} membership(s)"
        )

    def members(self, owner_id: str, collection_id: str) -> list[CollectionResource]:
        self.owned_collection(owner_id, collection_id)
        return (
            self.db.query(CollectionResource)
            .filter(CollectionResource.collection_id == collection_id)
            .order_by(CollectionResource.added_at.desc())
            .all()
        )
