"""Schemas for red tag items and their alerts."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class ExclusiveItemRead(BaseModel):
    id: int
    category: str
    current_price: Decimal
    date_arrived: date
    week: int
    days_on_floor: int
    notes: str | None
    picture_url: str | None
    created_by: int | None
    created_at: datetime | None
    updated_at: datetime | None


class ExclusiveItemList(BaseModel):
    items: list[ExclusiveItemRead]


class ExclusiveItemResponse(BaseModel):
    message: str | None = None
    item: ExclusiveItemRead


class ExclusiveAlertList(BaseModel):
    alerts: list[ExclusiveItemRead]


class BulkUpdateRequest(BaseModel):
    # Entries are validated by the use case so a malformed batch is rejected
    # with one message before anything is written.
    items: list = Field(default_factory=list)


class BulkUpdateFailureRead(BaseModel):
    id: int
    reason: str


class BulkUpdateResponse(BaseModel):
    message: str
    updated: list[int]
    failed: list[BulkUpdateFailureRead]
