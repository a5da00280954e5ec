"""Routes for the staff communication log and the urgent note stream."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Query,
    UploadFile,
    status,
)
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from thriftdesk.application.use_cases.communication import (
    count_unread as count_unread_uc,
    create_communication_entry as create_communication_entry_uc,
    delete_communication_entry as delete_communication_entry_uc,
    dismiss_urgent_note as dismiss_urgent_note_uc,
    get_communication_entry as get_communication_entry_uc,
    list_communication_entries as list_communication_entries_uc,
    list_undismissed_urgent as list_undismissed_urgent_uc,
    mark_all_read as mark_all_read_uc,
    toggle_pin as toggle_pin_uc,
    update_communication_entry as update_communication_entry_uc,
)
from thriftdesk.domain.entities import CommunicationEntry, User
from thriftdesk.infrastructure.database import SessionLocal, get_db
from thriftdesk.infrastructure.notifications import QueueSink, urgent_connection_manager
from thriftdesk.interfaces.api.dependencies import (
    require_manager_or_above,
    resolve_current_user,
)
from thriftdesk.interfaces.api.schemas import (
    CommunicationEntryList,
    CommunicationEntryRead,
    CommunicationEntryResponse,
    MarkAllReadResponse,
    MessageResponse,
    PinToggleResponse,
    UnreadCountResponse,
    UrgentNoteList,
)
from thriftdesk.interfaces.api.uploads import read_image_uploads

router = APIRouter(prefix="/communication", tags=["communication"])

CONNECTED_EVENT = {"type": "connected"}


def _to_read_model(entry: CommunicationEntry) -> CommunicationEntryRead:
    return CommunicationEntryRead.model_validate(entry)


def format_sse_event(message: dict[str, Any]) -> str:
    """Encode ``message`` as one server-sent event frame."""

    return f"data: {json.dumps(message, default=str)}\n\n"


@router.get("/", response_model=CommunicationEntryList)
def list_communication_entries(
    db: Session = Depends(get_db),
    _: User = Depends(require_manager_or_above),
) -> CommunicationEntryList:
    entries = list_communication_entries_uc(db)
    return CommunicationEntryList(entries=[_to_read_model(entry) for entry in entries])


@router.get("/unread-count", response_model=UnreadCountResponse)
def read_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager_or_above),
) -> UnreadCountResponse:
    return UnreadCountResponse(unread_count=count_unread_uc(db, user=current_user))


@router.post("/mark-all-read", response_model=MarkAllReadResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager_or_above),
) -> MarkAllReadResponse:
    return MarkAllReadResponse(marked_read=mark_all_read_uc(db, user=current_user))


@router.get("/urgent/undismissed", response_model=UrgentNoteList)
def list_undismissed_urgent(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager_or_above),
) -> UrgentNoteList:
    """Urgent notes the user has not acknowledged yet, for clients that were offline."""

    notes = list_undismissed_urgent_uc(db, user=current_user)
    return UrgentNoteList(urgent_notes=[_to_read_model(note) for note in notes])


@router.post("/urgent/{entry_id}/dismiss", response_model=MessageResponse)
def dismiss_urgent_note(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager_or_above),
) -> MessageResponse:
    dismiss_urgent_note_uc(db, entry_id=entry_id, user=current_user)
    return MessageResponse(message="Urgent note dismissed")


@router.get("/urgent-stream")
async def urgent_stream(token: str | None = Query(default=None)) -> StreamingResponse:
    """Server-sent event stream of urgent notes.

    Browsers cannot attach headers to an ``EventSource`` so the bearer token
    travels in the query string.
    """

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token required",
        )

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
    finally:
        session.close()

    if not user.is_active or not user.is_manager_or_above():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Manager access required",
        )

    return StreamingResponse(
        _urgent_event_stream(user),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


async def _urgent_event_stream(user: User) -> AsyncIterator[str]:
    sink = QueueSink()
    connection_id = urgent_connection_manager.connect(user.id, user.username, sink)
    try:
        yield format_sse_event(CONNECTED_EVENT)
        while True:
            message = await sink.receive()
            yield format_sse_event(message)
    finally:
        urgent_connection_manager.disconnect(connection_id)


@router.get("/{entry_id}", response_model=CommunicationEntryResponse)
def read_communication_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_manager_or_above),
) -> CommunicationEntryResponse:
    entry = get_communication_entry_uc(db, entry_id)
    return CommunicationEntryResponse(entry=_to_read_model(entry))


@router.post(
    "/", response_model=CommunicationEntryResponse, status_code=status.HTTP_201_CREATED
)
def create_communication_entry(
    note: str | None = Form(default=None),
    category: str | None = Form(default=None),
    pinned: bool = Form(default=False),
    pictures: list[UploadFile] | None = File(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager_or_above),
) -> CommunicationEntryResponse:
    """Add an entry; urgent entries are pushed to every open stream."""

    entry = create_communication_entry_uc(
        db,
        author=current_user,
        note=note,
        category=category,
        pinned=pinned,
        pictures=read_image_uploads(pictures),
    )
    return CommunicationEntryResponse(
        message="Entry created successfully", entry=_to_read_model(entry)
    )


@router.put("/{entry_id}", response_model=CommunicationEntryResponse)
def update_communication_entry(
    entry_id: int,
    note: str | None = Form(default=None),
    category: str | None = Form(default=None),
    pinned: bool = Form(default=False),
    pictures: list[UploadFile] | None = File(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager_or_above),
) -> CommunicationEntryResponse:
    entry = update_communication_entry_uc(
        db,
        entry_id=entry_id,
        editor=current_user,
        note=note,
        category=category,
        pinned=pinned,
        pictures=read_image_uploads(pictures),
    )
    return CommunicationEntryResponse(
        message="Entry updated successfully", entry=_to_read_model(entry)
    )


@router.patch("/{entry_id}/pin", response_model=PinToggleResponse)
def toggle_pin(
    entry_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_manager_or_above),
) -> PinToggleResponse:
    pinned = toggle_pin_uc(db, entry_id)
    return PinToggleResponse(
        message="Entry pinned" if pinned else "Entry unpinned", pinned=pinned
    )


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_communication_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_manager_or_above),
) -> MessageResponse:
    delete_communication_entry_uc(db, entry_id)
    return MessageResponse(message="Entry deleted successfully")
