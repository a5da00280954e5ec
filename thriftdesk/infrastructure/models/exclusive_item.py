"""SQLAlchemy model for red tag exclusive items."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, Numeric, String, Text

from thriftdesk.infrastructure.database import Base
from thriftdesk.utils import storage_now


class ExclusiveItemModel(Base):
    """Database representation of an item on the markdown schedule."""

    __tablename__ = "exclusive_items"
    __table_args__ = (
        Index("ix_exclusive_items_week_arrived", "week", "date_arrived"),
    )

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String(50), nullable=False, index=True)
    picture_url = Column(Text, nullable=True)
    date_arrived = Column(Date, nullable=False)
    current_price = Column(Numeric(10, 2), nullable=False)
    week = Column(Integer, nullable=False, default=1)
    notes = Column(Text, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=storage_now)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=storage_now,
        onupdate=storage_now,
    )
    deleted_at = Column(DateTime, nullable=True, index=True)


__all__ = ["ExclusiveItemModel"]
