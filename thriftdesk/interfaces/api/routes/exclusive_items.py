"""Routes for red tag items moving down the markdown ladder."""

from datetime import date

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from thriftdesk.application.use_cases.exclusive_items import (
    bulk_update_exclusive_items as bulk_update_exclusive_items_uc,
    create_exclusive_item as create_exclusive_item_uc,
    delete_exclusive_item as delete_exclusive_item_uc,
    get_exclusive_item as get_exclusive_item_uc,
    list_exclusive_alerts as list_exclusive_alerts_uc,
    list_exclusive_items as list_exclusive_items_uc,
    move_to_color_cycle as move_to_color_cycle_uc,
    parse_bulk_entries,
    promote_due_items,
    update_exclusive_item as update_exclusive_item_uc,
)
from thriftdesk.domain.entities import ExclusiveItem, User
from thriftdesk.infrastructure.database import get_db
from thriftdesk.interfaces.api.dependencies import get_current_active_user
from thriftdesk.interfaces.api.schemas import (
    BulkUpdateFailureRead,
    BulkUpdateRequest,
    BulkUpdateResponse,
    ExclusiveAlertList,
    ExclusiveItemList,
    ExclusiveItemRead,
    ExclusiveItemResponse,
    MessageResponse,
)
from thriftdesk.interfaces.api.uploads import read_image_upload
from thriftdesk.utils import store_today

router = APIRouter(prefix="/exclusive-items", tags=["exclusive-items"])


def _to_read_model(item: ExclusiveItem, today: date) -> ExclusiveItemRead:
    return ExclusiveItemRead(
        id=item.id,
        category=item.category,
        current_price=item.price,
        date_arrived=item.date_arrived,
        week=item.week,
        days_on_floor=item.days_on_floor(today),
        notes=item.notes,
        picture_url=item.picture_url,
        created_by=item.created_by,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


@router.get("/", response_model=ExclusiveItemList)
def list_exclusive_items(
    category: str | None = Query(default=None),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> ExclusiveItemList:
    """Return every live item after applying the automatic color cycle promotion."""

    today = store_today()
    promote_due_items(db, today=today)
    items = list_exclusive_items_uc(db, category=category)
    return ExclusiveItemList(items=[_to_read_model(item, today) for item in items])


@router.get("/alerts", response_model=ExclusiveAlertList)
def list_exclusive_alerts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ExclusiveAlertList:
    """Return overdue items in the categories the user subscribed to."""

    today = store_today()
    promote_due_items(db, today=today)
    alerts = list_exclusive_alerts_uc(db, user=current_user, today=today)
    return ExclusiveAlertList(alerts=[_to_read_model(item, today) for item in alerts])


@router.get("/{item_id}", response_model=ExclusiveItemResponse)
def read_exclusive_item(
    item_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> ExclusiveItemResponse:
    today = store_today()
    promote_due_items(db, today=today)
    item = get_exclusive_item_uc(db, item_id)
    return ExclusiveItemResponse(item=_to_read_model(item, today))


@router.post(
    "/", response_model=ExclusiveItemResponse, status_code=status.HTTP_201_CREATED
)
def create_exclusive_item(
    category: str | None = Form(default=None),
    current_price: str | None = Form(default=None),
    notes: str | None = Form(default=None),
    picture: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ExclusiveItemResponse:
    today = store_today()
    item = create_exclusive_item_uc(
        db,
        category=category,
        price=current_price,
        notes=notes,
        picture=read_image_upload(picture),
        created_by=current_user.id,
        today=today,
    )
    return ExclusiveItemResponse(
        message="Item created successfully", item=_to_read_model(item, today)
    )


@router.put("/{item_id}", response_model=ExclusiveItemResponse)
def update_exclusive_item(
    item_id: int,
    category: str | None = Form(default=None),
    current_price: str | None = Form(default=None),
    week: str | None = Form(default=None),
    notes: str | None = Form(default=None),
    picture: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> ExclusiveItemResponse:
    """Edit an item. ``week`` accepts 1-5 or ``color-cycle``."""

    today = store_today()
    item = update_exclusive_item_uc(
        db,
        item_id=item_id,
        category=category,
        price=current_price,
        week=week or None,
        notes=notes,
        picture=read_image_upload(picture),
        today=today,
    )
    return ExclusiveItemResponse(
        message="Item updated successfully", item=_to_read_model(item, today)
    )


@router.patch("/bulk-update", response_model=BulkUpdateResponse)
def bulk_update_exclusive_items(
    payload: BulkUpdateRequest,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> BulkUpdateResponse:
    """Apply several price and week changes; each item succeeds or fails alone."""

    entries = parse_bulk_entries(payload.items)
    result = bulk_update_exclusive_items_uc(db, items=entries)
    return BulkUpdateResponse(
        message=f"{len(result.updated)} item(s) updated",
        updated=result.updated,
        failed=[
            BulkUpdateFailureRead(id=failure.item_id, reason=failure.reason)
            for failure in result.failed
        ],
    )


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_exclusive_item(
    item_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> MessageResponse:
    delete_exclusive_item_uc(db, item_id)
    return MessageResponse(message="Item deleted successfully")


@router.post("/{item_id}/color-cycle", response_model=MessageResponse)
def move_to_color_cycle(
    item_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> MessageResponse:
    """Confirm the item went to the color cycle floor and remove it from the list."""

    move_to_color_cycle_uc(db, item_id)
    return MessageResponse(message="Item moved to color cycle")
