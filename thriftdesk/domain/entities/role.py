"""Staff roles recognised by the role gates."""

from typing import Final

ROLE_ADMIN: Final[str] = "Admin"
ROLE_MANAGER: Final[str] = "Manager"
ROLE_CLOTHING_MANAGER: Final[str] = "Clothing Manager"
ROLE_BRIC_A_BRAC_MANAGER: Final[str] = "Bric-a-Brac Manager"
ROLE_EMPLOYEE: Final[str] = "Employee"

ROLES: Final[tuple[str, ...]] = (
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_CLOTHING_MANAGER,
    ROLE_BRIC_A_BRAC_MANAGER,
    ROLE_EMPLOYEE,
)

MANAGER_ROLES: Final[frozenset[str]] = frozenset(
    {ROLE_ADMIN, ROLE_MANAGER, ROLE_CLOTHING_MANAGER, ROLE_BRIC_A_BRAC_MANAGER}
)


__all__ = [
    "ROLE_ADMIN",
    "ROLE_MANAGER",
    "ROLE_CLOTHING_MANAGER",
    "ROLE_BRIC_A_BRAC_MANAGER",
    "ROLE_EMPLOYEE",
    "ROLES",
    "MANAGER_ROLES",
]
