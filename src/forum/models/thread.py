import uuid
from datetime import datetime, timezone
from sqlalchemy.orm import Mapped, mapped_column, validates
from sqlalchemy import ForeignKey, Text, DateTime, Integer
from forum.db.session import Base
from forum.services.validation import ensure_filled


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Thread(Base):
    """forum thread owned by the user who created it"""
    __tablename__ = "threads"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    # the store refuses to hold an empty title/body even if a caller skips the gate
    @validates("title", "body")
    def _validate_required(self, key: str, value: str | None) -> str:
        return ensure_filled(key, value)

    def touch(self) -> None:
        self.updated_at = _utcnow()
