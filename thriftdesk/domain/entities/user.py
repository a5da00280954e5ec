"""Domain entity representing a staff user."""

from dataclasses import dataclass
from datetime import datetime

from thriftdesk.domain.markdown import (
    CATEGORY_BRIC_A_BRAC,
    CATEGORY_CLOTHING,
    CATEGORY_FURNITURE,
)

from .role import MANAGER_ROLES, ROLE_ADMIN


@dataclass
class User:
    """Core attributes describing a staff account."""

    id: int | None
    username: str
    password: str
    role: str
    email: str | None
    furniture_alerts: bool
    clothing_alerts: bool
    bricabrac_alerts: bool
    is_active: bool
    created_at: datetime | None
    deleted_at: datetime | None

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)

    def is_manager_or_above(self) -> bool:
        return self.role in MANAGER_ROLES

    def alert_categories(self) -> list[str]:
        """Return the exclusive item categories the user is subscribed to."""

        categories: list[str] = []
        if self.furniture_alerts:
            categories.append(CATEGORY_FURNITURE)
        if self.clothing_alerts:
            categories.append(CATEGORY_CLOTHING)
        if self.bricabrac_alerts:
            categories.append(CATEGORY_BRIC_A_BRAC)
        return categories


__all__ = ["User"]
