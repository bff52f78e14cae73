from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database import Base


class CollectionResource(Base):
    """Membership record: exists iff collection_id is in the resource's collection_ids."""

    __tablename__ = "collection_resources"

    collection_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("collections.id"),
        primary_key=True,
    )
    resource_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("resources.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )

    collection: Mapped["Collection"] = relationship(back_populates="memberships")  # noqa: F821
