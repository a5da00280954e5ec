"""SQLAlchemy model for furniture approval requests."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, JSON, Numeric, String, Text
from sqlalchemy.orm import relationship

from thriftdesk.domain.entities import APPROVAL_STATUS_PENDING
from thriftdesk.infrastructure.database import Base
from thriftdesk.utils import storage_now


class DiscountItemModel(Base):
    """Database representation of a discount item awaiting or holding approval."""

    __tablename__ = "discount_items"

    id = Column(Integer, primary_key=True, index=True)
    picture_urls = Column(JSON, nullable=False, default=list)
    price = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=True)
    date_added = Column(Date, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=storage_now)
    approval_status = Column(
        String(20), nullable=False, default=APPROVAL_STATUS_PENDING, index=True
    )
    approval_note = Column(Text, nullable=True)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    deleted_at = Column(DateTime, nullable=True, index=True)

    creator = relationship("UserModel", foreign_keys=[created_by], lazy="joined")
    approver = relationship("UserModel", foreign_keys=[approved_by], lazy="joined")


__all__ = ["DiscountItemModel"]
