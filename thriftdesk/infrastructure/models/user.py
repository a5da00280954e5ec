"""SQLAlchemy model for the users table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import expression

from thriftdesk.infrastructure.database import Base
from thriftdesk.utils import storage_now


class UserModel(Base):
    """Database representation of a staff account."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False)
    email = Column(String(255), nullable=True)
    furniture_alerts = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    clothing_alerts = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    bricabrac_alerts = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(DateTime, nullable=False, default=storage_now)
    deleted_at = Column(DateTime, nullable=True)


__all__ = ["UserModel"]
