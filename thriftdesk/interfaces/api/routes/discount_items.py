"""Routes for furniture approval requests."""

from datetime import date

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from thriftdesk.application.use_cases.discount_items import (
    approve_discount_item as approve_discount_item_uc,
    create_discount_item as create_discount_item_uc,
    delete_discount_item as delete_discount_item_uc,
    get_discount_item as get_discount_item_uc,
    list_discount_items as list_discount_items_uc,
    update_discount_item as update_discount_item_uc,
)
from thriftdesk.domain.entities import DiscountItem, User
from thriftdesk.infrastructure.database import get_db
from thriftdesk.interfaces.api.dependencies import get_current_active_user
from thriftdesk.interfaces.api.schemas import (
    ApprovalRequest,
    DiscountItemList,
    DiscountItemRead,
    DiscountItemResponse,
    MessageResponse,
)
from thriftdesk.interfaces.api.uploads import read_image_uploads
from thriftdesk.utils import days_between, store_today

router = APIRouter(prefix="/discount-items", tags=["discount-items"])


def _to_read_model(item: DiscountItem, today: date) -> DiscountItemRead:
    return DiscountItemRead(
        id=item.id,
        price=item.price,
        notes=item.notes,
        picture_urls=item.picture_urls,
        date_added=item.date_added,
        days_in_discount=days_between(item.date_added, today),
        approval_status=item.approval_status,
        approval_note=item.approval_note,
        created_by=item.created_by,
        created_by_username=item.created_by_username,
        approved_by=item.approved_by,
        approved_by_username=item.approved_by_username,
        approved_at=item.approved_at,
        created_at=item.created_at,
    )


@router.get("/", response_model=DiscountItemList)
def list_discount_items(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> DiscountItemList:
    """Return every live request, pending ones first."""

    today = store_today()
    items = list_discount_items_uc(db)
    return DiscountItemList(items=[_to_read_model(item, today) for item in items])


@router.get("/{item_id}", response_model=DiscountItemResponse)
def read_discount_item(
    item_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> DiscountItemResponse:
    item = get_discount_item_uc(db, item_id)
    return DiscountItemResponse(item=_to_read_model(item, store_today()))


@router.post("/", response_model=DiscountItemResponse, status_code=status.HTTP_201_CREATED)
def create_discount_item(
    price: str | None = Form(default=None),
    notes: str | None = Form(default=None),
    pictures: list[UploadFile] | None = File(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> DiscountItemResponse:
    today = store_today()
    item = create_discount_item_uc(
        db,
        price=price,
        notes=notes,
        pictures=read_image_uploads(pictures),
        created_by=current_user.id,
        today=today,
    )
    return DiscountItemResponse(
        message="Furniture approval request created successfully",
        item=_to_read_model(item, today),
    )


@router.put("/{item_id}", response_model=DiscountItemResponse)
def update_discount_item(
    item_id: int,
    price: str | None = Form(default=None),
    notes: str | None = Form(default=None),
    pictures: list[UploadFile] | None = File(default=None),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> DiscountItemResponse:
    """Edit a pending request; approved requests are locked."""

    item = update_discount_item_uc(
        db,
        item_id=item_id,
        price=price,
        notes=notes,
        pictures=read_image_uploads(pictures),
    )
    return DiscountItemResponse(
        message="Furniture approval request updated successfully",
        item=_to_read_model(item, store_today()),
    )


@router.post("/{item_id}/approve", response_model=DiscountItemResponse)
def approve_discount_item(
    item_id: int,
    payload: ApprovalRequest | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> DiscountItemResponse:
    """Approve a pending request. Only admins may approve."""

    item = approve_discount_item_uc(
        db,
        item_id=item_id,
        approver=current_user,
        approval_note=payload.approval_note if payload else None,
    )
    return DiscountItemResponse(
        message="Item approved successfully",
        item=_to_read_model(item, store_today()),
    )


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_discount_item(
    item_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_active_user),
) -> MessageResponse:
    delete_discount_item_uc(db, item_id)
    return MessageResponse(message="Item deleted successfully")
