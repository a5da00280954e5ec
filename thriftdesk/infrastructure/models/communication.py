"""SQLAlchemy models for the communication log and its per-user ledgers."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from thriftdesk.infrastructure.database import Base
from thriftdesk.utils import storage_now


class CommunicationLogModel(Base):
    """Database representation of a communication log entry."""

    __tablename__ = "communication_log"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    note = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, default="General")
    pinned = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    is_urgent = Column(
        Boolean, nullable=False, default=False, server_default=expression.false(), index=True
    )
    picture_urls = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=storage_now)
    deleted_at = Column(DateTime, nullable=True, index=True)

    author = relationship("UserModel", lazy="joined")


class UrgentNoteDismissalModel(Base):
    """Records that a user acknowledged an urgent entry."""

    __tablename__ = "urgent_note_dismissals"
    __table_args__ = (UniqueConstraint("note_id", "user_id", name="uq_urgent_dismissal"),)

    id = Column(Integer, primary_key=True)
    note_id = Column(
        Integer,
        ForeignKey("communication_log.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    dismissed_at = Column(DateTime, nullable=False, default=storage_now)


class CommunicationReadModel(Base):
    """Read receipt used by the unread counter."""

    __tablename__ = "communication_log_reads"
    __table_args__ = (UniqueConstraint("message_id", "user_id", name="uq_communication_read"),)

    id = Column(Integer, primary_key=True)
    message_id = Column(
        Integer,
        ForeignKey("communication_log.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    read_at = Column(DateTime, nullable=False, default=storage_now)


__all__ = [
    "CommunicationLogModel",
    "UrgentNoteDismissalModel",
    "CommunicationReadModel",
]
