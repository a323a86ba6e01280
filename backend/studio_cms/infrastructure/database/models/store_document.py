"""SQLAlchemy ORM model for one top-level namespace of the record tree."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from studio_cms.infrastructure.database.base import Base


class StoreDocumentModel(Base):
    """ORM model — maps to the 'store_documents' table."""

    __tablename__ = "store_documents"

    namespace: Mapped[str] = mapped_column(String(100), primary_key=True)
    data: Mapped[Any] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<StoreDocumentModel(namespace='{self.namespace}')>"
