import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from database import atomic
from models import CollectionResource, Resource
from services.membership import MembershipSynchronizer
from services.validation import clean_note, require_text, validate_link

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "link", "note", "tag", "is_public")


class ResourceStore:
    """CRUD for saved links. Collection assignment goes through MembershipSynchronizer."""

    def __init__(self, db: Session):
        self.db = db
        self.memberships = MembershipSynchronizer(db)

    def create(
        self,
        owner_id: str,
        title: str | None,
        link: str | None,
        tag: str | None,
        note: str | None = None,
        is_public: bool | None = None,
        collection_ids: list[str] | None = None,
    ) -> Resource:
        title = require_text(title, "title")
        link = validate_link(link)
        tag = require_text(tag, "tag")

        with atomic(self.db):
            desired = self.memberships.require_collections(owner_id, collection_ids or [])
            resource = Resource(
                owner_id=owner_id,
                title=title,
                link=link,
                tag=tag,
                note=clean_note(note),
                is_public=bool(is_public),
            )
            self.memberships.link_new_resource(resource, desired)
        logger.info(f"Created resource {resource.id} for {owner_id}")
        return resource

    def get(self, owner_id: str, resource_id: str) -> Resource:
        return self.memberships.owned_resource(owner_id, resource_id)

    def list_by_owner(
        self, owner_id: str, collection_id: str | None = None
    ) -> list[Resource]:
        query = self.db.query(Resource).filter(Resource.owner_id == owner_id)
        if collection_id:
            member_ids = select(CollectionResource.resource_id).where(
                CollectionResource.collection_id == collection_id
            )
            query = query.filter(Resource.id.in_(member_ids))
        return query.order_by(Resource.created_at.desc(), Resource.id).all()

    def update(self, owner_id: str, resource_id: str, changes: dict) -> Resource:
        """
        Partial merge: only keys present in ``changes`` are written.

        A ``collection_ids`` key replaces the resource's whole assignment list
        and is reconciled in the same unit as the field changes.
        """
        changes = dict(changes)
        desired_ids = changes.pop("collection_ids", None)
        fields = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        if "title" in fields:
            fields["title"] = require_text(fields["title"], "title")
        if "tag" in fields:
            fields["tag"] = require_text(fields["tag"], "tag")
        if "link" in fields:
            fields["link"] = validate_link(fields["link"])
        if "note" in fields:
            fields["note"] = clean_note(fields["note"])
        if "is_public" in fields:
            if fields["is_public"] is None:
                del fields["is_public"]
            else:
                fields["is_public"] = bool(fields["is_public"])

        with atomic(self.db):
            resource = self.memberships.owned_resource(owner_id, resource_id)
            for field, value in fields.items():
                setattr(resource, field, value)
            if desired_ids is not None:
                desired = self.memberships.require_collections(owner_id, desired_ids)
                self.memberships.apply(resource, desired)
        logger.info(f"Updated resource {resource_id}")
        return resource

    def delete(self, owner_id: str, resource_id: str) -> None:
        self.memberships.teardown_resource(owner_id, resource_id)
