import logging

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from database import atomic
from errors import ConflictError, NotFoundError, ValidationError
from models import Resource, User
from services.validation import require_text, validate_username

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, db: Session):
        self.db = db

    def _username_taken(self, username: str, user_id: str | None) -> bool:
        query = self.db.query(User.id).filter(User.username == username)
        if user_id is not None:
            query = query.filter(User.id != user_id)
        return query.first() is not None

    def check_username(
        self, username: str, user_id: str | None = None
    ) -> tuple[bool, str | None]:
        """A signed-in caller's own current username counts as available."""
        try:
            validate_username(username)
        except ValidationError as e:
            return False, e.message
        return not self._username_taken(username, user_id), None

    def get_profile(self, user_id: str) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User profile not found")
        return user

    def upsert_profile(
        self,
        user_id: str,
        username: str,
        email: str,
        share_by_default: bool = False,
    ) -> User:
        """Create the profile on first sign-in, or merge into the existing one."""
        username = validate_username(username)
        email = require_text(email, "email")

        with atomic(self.db):
            # Friendly pre-check; the unique index on username is the real guard
            if self._username_taken(username, user_id):
                raise ConflictError("Username is already taken")
            user = self.db.get(User, user_id)
            if user is None:
                user = User(id=user_id)
                self.db.add(user)
            user.username = username
            user.email = email
            user.share_by_default = bool(share_by_default)
        logger.info(f"Saved profile for {user_id}")
        return user

    def update_profile(self, user_id: str, changes: dict) -> User:
        username = changes.get("username")
        if username is not None:
            validate_username(username)

        with atomic(self.db):
            user = self.get_profile(user_id)
            if username is not None and username != user.username:
                if self._username_taken(username, user_id):
                    raise ConflictError("Username is already taken")
                user.username = username
            if changes.get("share_by_default") is not None:
                user.share_by_default = bool(changes["share_by_default"])
        logger.info(f"Updated profile for {user_id}")
        return user

    def stats(self, user_id: str) -> dict:
        total, public = (
            self.db.query(
                func.count(Resource.id),
                func.coalesce(
                    func.sum(case((Resource.is_public.is_(True), 1), else_=0)), 0
                ),
            )
            .filter(Resource.owner_id == user_id)
            .one()
        )
        return {"total": total, "public": public, "private": total - public}
