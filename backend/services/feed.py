import logging

from sqlalchemy.orm import Session

from database import atomic
from errors import ConflictError, NotFoundError
from models import Resource

logger = logging.getLogger(__name__)


class PublicFeed:
    """The Shared Dump: public resources of other users."""

    def __init__(self, db: Session):
        self.db = db

    def list_public(self, requesting_user_id: str) -> list[Resource]:
        return (
            self.db.query(Resource)
            .filter(
                Resource.is_public.is_(True),
                Resource.owner_id != requesting_user_id,
            )
            .order_by(Resource.created_at.desc(), Resource.id)
            .all()
        )

    def save_from_feed(self, user_id: str, resource_id: str) -> Resource:
        """Copy a public resource into user_id's vault as a new private resource."""
        with atomic(self.db):
            source = self.db.get(Resource, resource_id)
            if source is None or not source.is_public:
                raise NotFoundError("Resource not found")

            duplicate = (
                self.db.query(Resource.id)
                .filter(Resource.owner_id == user_id, Resource.link == source.link)
                .first()
            )
            if duplicate is not None:
                raise ConflictError("You already have this resource saved")

            copy = Resource(
                owner_id=user_id,
                title=source.title,
                link=source.link,
                note=source.note,
                tag=source.tag,
                is_public=False,
                collection_ids=[],
            )
            self.db.add(copy)
        logger.info(f"User {user_id} saved {resource_id} from feed as {copy.id}")
        return copy
