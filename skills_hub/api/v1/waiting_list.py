import uuid
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.api.v1.branches import get_branch_or_404
from skills_hub.core.errors import NotFoundError
from skills_hub.models import User, WaitingListEntry, WaitingListStatus
from skills_hub.schemas import (
    APIResponse,
    WaitingListCreate,
    WaitingListResponse,
    WaitingListStatusUpdate,
    WaitingListUpdate,
)

router = APIRouter()

# Columns that are NOT NULL; a null in an update leaves them as they are
REQUIRED_FIELDS = (
    "student_name",
    "parent_name",
    "parent_email",
    "desired_grade",
    "branch_name",
    "priority",
)


def _get_entry_or_404(db: Session, entry_id: uuid.UUID) -> WaitingListEntry:
    entry = db.query(WaitingListEntry).filter(WaitingListEntry.id == entry_id).first()
    if not entry:
        raise NotFoundError("Waiting list entry not found")
    return entry


def _apply_branch(db: Session, entry: WaitingListEntry, branch_id) -> None:
    """Link the entry to a branch and take over its name; None unlinks it."""
    if branch_id is None:
        entry.branch = None
        return
    branch = get_branch_or_404(db, branch_id)
    entry.branch = branch
    entry.branch_name = branch.name


@router.get("", response_model=APIResponse)
def list_waiting_list(
    search: Optional[str] = None,
    status: Optional[WaitingListStatus] = None,
    grade: Optional[str] = None,
    branch: Optional[str] = None,
    branch_id: Optional[uuid.UUID] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    """Waiting list by priority, then oldest application first"""
    query = db.query(WaitingListEntry)

    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                WaitingListEntry.student_name.ilike(pattern),
                WaitingListEntry.parent_name.ilike(pattern),
                WaitingListEntry.parent_email.ilike(pattern),
            )
        )
    if status:
        query = query.filter(WaitingListEntry.status == status)
    if grade:
        query = query.filter(WaitingListEntry.desired_grade == grade)
    if branch:
        query = query.filter(WaitingListEntry.branch_name == branch)
    if branch_id:
        query = query.filter(WaitingListEntry.branch_id == branch_id)

    entries = query.order_by(
        WaitingListEntry.priority.asc(), WaitingListEntry.application_date.asc()
    ).all()
    return {
        "success": True,
        "message": "Waiting list retrieved successfully",
        "data": [WaitingListResponse.model_validate(e) for e in entries],
    }


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
def add_to_waiting_list(
    entry_in: WaitingListCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    entry = WaitingListEntry(
        **entry_in.model_dump(exclude={"branch_id"}),
        application_date=date.today(),
        status=WaitingListStatus.waiting,
    )
    if entry_in.branch_id is not None:
        _apply_branch(db, entry, entry_in.branch_id)
    db.add(entry)
    db.commit()
    db.refresh(entry)

    return {
        "success": True,
        "message": "Added to waiting list",
        "data": WaitingListResponse.model_validate(entry),
    }


@router.put("/{entry_id}", response_model=APIResponse)
def update_waiting_list_entry(
    entry_id: uuid.UUID,
    entry_in: WaitingListUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    entry = _get_entry_or_404(db, entry_id)
    update_dict = entry_in.model_dump(exclude_unset=True)
    relink = "branch_id" in update_dict
    branch_id = update_dict.pop("branch_id", None)
    for key, value in update_dict.items():
        if value is None and key in REQUIRED_FIELDS:
            continue
        setattr(entry, key, value)

    if relink:
        _apply_branch(db, entry, branch_id)
    elif entry.branch is not None:
        entry.branch_name = entry.branch.name
    db.commit()
    db.refresh(entry)

    return {
        "success": True,
        "message": "Waiting list entry updated",
        "data": WaitingListResponse.model_validate(entry),
    }


@router.patch("/{entry_id}/status", response_model=APIResponse)
def update_waiting_list_status(
    entry_id: uuid.UUID,
    status_in: WaitingListStatusUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    entry = _get_entry_or_404(db, entry_id)
    entry.status = status_in.status
    db.commit()
    db.refresh(entry)

    return {
        "success": True,
        "message": f"Status changed to {entry.status.value}",
        "data": WaitingListResponse.model_validate(entry),
    }


@router.delete("/{entry_id}", response_model=APIResponse)
def remove_from_waiting_list(
    entry_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    entry = _get_entry_or_404(db, entry_id)
    db.delete(entry)
    db.commit()
    return {"success": True, "message": "Removed from waiting list", "data": None}
