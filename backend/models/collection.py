import time
import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Boolean, BigInteger, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database import Base


def now_ms() -> int:
    return time.time_ns() // 1_000_000


class Collection(Base):
    __tablename__ = "collections"

    id: Mapped[str] = mapped_column(
        String, primary_key=True, default=lambda: str(uuid.uuid4())
    )
    owner_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    icon: Mapped[str | None] = mapped_column(String)
    color: Mapped[str | None] = mapped_column(String)
    is_shared: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    sort_order: Mapped[int] = mapped_column(BigInteger, default=now_ms, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    memberships: Mapped[list["CollectionResource"]] = relationship(  # noqa: F821
        back_populates="collection", cascade="all, delete-orphan"
    )
