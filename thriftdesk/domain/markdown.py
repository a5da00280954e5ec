"""Rules of the red tag markdown schedule.

Exclusive items start at week 1 and are moved down the price ladder by staff
when the alert list says they are due. Only the last step is automatic: an
item that has been on the floor for :data:`COLOR_CYCLE_PROMOTION_DAYS` while
at week 4 becomes week 5 ("ready for color cycle"), after which the only way
off the ladder is a soft delete.

The alert thresholds and the promotion threshold are independent constants;
they are not derived from one another.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Final

from .exceptions import ValidationError

CATEGORY_FURNITURE: Final[str] = "Furniture"
CATEGORY_CLOTHING: Final[str] = "Clothing"
CATEGORY_BRIC_A_BRAC: Final[str] = "Bric-a-Brac"
EXCLUSIVE_CATEGORIES: Final[tuple[str, ...]] = (
    CATEGORY_FURNITURE,
    CATEGORY_CLOTHING,
    CATEGORY_BRIC_A_BRAC,
)

FIRST_WEEK: Final[int] = 1
COLOR_CYCLE_WEEK: Final[int] = 5
VALID_WEEKS: Final[frozenset[int]] = frozenset(range(FIRST_WEEK, COLOR_CYCLE_WEEK + 1))

# Staff send an item straight to the color cycle with either value.
COLOR_CYCLE_SENTINEL: Final[str] = "color-cycle"
COLOR_CYCLE_SENTINEL_WEEK: Final[int] = 6

PROMOTION_SOURCE_WEEK: Final[int] = 4
COLOR_CYCLE_PROMOTION_DAYS: Final[int] = 28

# Days on the floor after which an item at the given week needs a markdown.
WEEK_ALERT_THRESHOLDS: Final[dict[int, int]] = {1: 7, 2: 14, 3: 21}

_PRICE_QUANTUM = Decimal("0.01")


def normalize_category(value: str | None) -> str:
    """Return ``value`` when it names a known category."""

    candidate = (value or "").strip()
    if not candidate:
        raise ValidationError("Category and price are required")
    if candidate not in EXCLUSIVE_CATEGORIES:
        raise ValidationError("Invalid category")
    return candidate


def normalize_price(value: object) -> Decimal:
    """Parse ``value`` into a non-negative amount with two decimal places."""

    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Price is required")
    if isinstance(value, bool):
        raise ValidationError("Price must be a number")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError("Price must be a number") from exc
    if not amount.is_finite():
        raise ValidationError("Price must be a number")
    if amount < 0:
        raise ValidationError("Price cannot be negative")
    return amount.quantize(_PRICE_QUANTUM)


def normalize_week(value: object) -> int:
    """Return the markdown week requested by staff.

    The color cycle sentinel is folded into week 5 rather than removing the
    item; removal only happens through the confirmed color cycle action.
    """

    if isinstance(value, str):
        candidate = value.strip().lower()
        if candidate == COLOR_CYCLE_SENTINEL:
            return COLOR_CYCLE_WEEK
        try:
            value = int(candidate)
        except ValueError as exc:
            raise ValidationError("Week must be between 1 and 5") from exc
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Week must be between 1 and 5")
    if value == COLOR_CYCLE_SENTINEL_WEEK:
        return COLOR_CYCLE_WEEK
    if value not in VALID_WEEKS:
        raise ValidationError("Week must be between 1 and 5")
    return value


def is_due_for_color_cycle(week: int, days_on_floor: int) -> bool:
    """Return ``True`` when the automatic week 4 -> 5 promotion applies."""

    return week == PROMOTION_SOURCE_WEEK and days_on_floor >= COLOR_CYCLE_PROMOTION_DAYS


def needs_attention(week: int, days_on_floor: int) -> bool:
    """Return ``True`` when an item should appear on a subscriber's alert list."""

    if week == COLOR_CYCLE_WEEK:
        return True
    threshold = WEEK_ALERT_THRESHOLDS.get(week)
    return threshold is not None and days_on_floor >= threshold


__all__ = [
    "CATEGORY_FURNITURE",
    "CATEGORY_CLOTHING",
    "CATEGORY_BRIC_A_BRAC",
    "EXCLUSIVE_CATEGORIES",
    "FIRST_WEEK",
    "COLOR_CYCLE_WEEK",
    "VALID_WEEKS",
    "COLOR_CYCLE_SENTINEL",
    "COLOR_CYCLE_SENTINEL_WEEK",
    "PROMOTION_SOURCE_WEEK",
    "COLOR_CYCLE_PROMOTION_DAYS",
    "WEEK_ALERT_THRESHOLDS",
    "normalize_category",
    "normalize_price",
    "normalize_week",
    "is_due_for_color_cycle",
    "needs_attention",
]
