"""Schemas for the furniture approval workflow."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel


class DiscountItemRead(BaseModel):
    id: int
    price: Decimal
    notes: str | None
    picture_urls: list[str]
    date_added: date
    days_in_discount: int
    approval_status: str
    approval_note: str | None
    created_by: int | None
    created_by_username: str | None
    approved_by: int | None
    approved_by_username: str | None
    approved_at: datetime | None
    created_at: datetime | None


class DiscountItemList(BaseModel):
    items: list[DiscountItemRead]


class DiscountItemResponse(BaseModel):
    message: str | None = None
    item: DiscountItemRead


class ApprovalRequest(BaseModel):
    approval_note: str | None = None
