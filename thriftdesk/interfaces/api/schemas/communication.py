"""Schemas for the communication log and urgent notes."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommunicationEntryRead(BaseModel):
    id: int
    user_id: int | None
    note: str
    category: str
    pinned: bool
    is_urgent: bool
    picture_urls: list[str]
    created_at: datetime | None
    username: str | None
    role: str | None

    model_config = ConfigDict(from_attributes=True)


class CommunicationEntryList(BaseModel):
    entries: list[CommunicationEntryRead]


class CommunicationEntryResponse(BaseModel):
    message: str | None = None
    entry: CommunicationEntryRead


class PinToggleResponse(BaseModel):
    message: str
    pinned: bool


class UnreadCountResponse(BaseModel):
    unread_count: int


class MarkAllReadResponse(BaseModel):
    success: bool = True
    marked_read: int


class UrgentNoteList(BaseModel):
    urgent_notes: list[CommunicationEntryRead] = Field(serialization_alias="urgentNotes")
