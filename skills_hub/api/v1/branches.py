import logging
import uuid
from typing import Dict, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.core.errors import ConflictError, NotFoundError
from skills_hub.models import (
    Branch,
    BranchStatus,
    User,
    WaitingListEntry,
    WaitingListStatus,
)
from skills_hub.schemas import APIResponse, BranchCreate, BranchResponse, BranchUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

require_branch_staff = deps.RoleChecker(["branch_manager"])

# Columns that are NOT NULL; a null in an update leaves them as they are
REQUIRED_FIELDS = (
    "name",
    "address",
    "phone",
    "email",
    "manager_name",
    "manager_email",
    "status",
)


def get_branch_or_404(db: Session, branch_id: uuid.UUID) -> Branch:
    branch = db.query(Branch).filter(Branch.id == branch_id).first()
    if not branch:
        raise NotFoundError("Branch not found")
    return branch


def _ensure_unique_name(db: Session, name: str, exclude_id: Optional[uuid.UUID] = None):
    query = db.query(Branch).filter(func.lower(Branch.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Branch.id != exclude_id)
    if query.first():
        raise ConflictError("Branch name already exists")


def waiting_counts(db: Session) -> Dict[uuid.UUID, int]:
    """Applicants still waiting, per branch."""
    return dict(
        db.query(WaitingListEntry.branch_id, func.count(WaitingListEntry.id))
        .filter(
            WaitingListEntry.branch_id.isnot(None),
            WaitingListEntry.status == WaitingListStatus.waiting,
        )
        .group_by(WaitingListEntry.branch_id)
        .all()
    )


def _to_response(branch: Branch, counts: Dict[uuid.UUID, int]) -> BranchResponse:
    response = BranchResponse.model_validate(branch)
    response.waiting_list_size = counts.get(branch.id, 0)
    return response


@router.get("", response_model=APIResponse)
def list_branches(
    search: Optional[str] = None,
    status: Optional[BranchStatus] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Branches by name, optionally filtered by status or a search term"""
    query = db.query(Branch)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Branch.name.ilike(pattern),
                Branch.address.ilike(pattern),
                Branch.manager_name.ilike(pattern),
            )
        )
    if status:
        query = query.filter(Branch.status == status)

    counts = waiting_counts(db)
    return {
        "success": True,
        "message": "Branches retrieved successfully",
        "data": [_to_response(b, counts) for b in query.order_by(Branch.name.asc()).all()],
    }


@router.get("/{branch_id}", response_model=APIResponse)
def get_branch(
    branch_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    branch = get_branch_or_404(db, branch_id)
    return {
        "success": True,
        "message": "Branch retrieved successfully",
        "data": _to_response(branch, waiting_counts(db)),
    }


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
def create_branch(
    branch_in: BranchCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_branch_staff),
):
    """Open a new branch (Admin or branch manager)"""
    _ensure_unique_name(db, branch_in.name)
    branch = Branch(**branch_in.model_dump())
    db.add(branch)
    db.commit()
    db.refresh(branch)
    logger.info("Branch %s created by %s", branch.name, current_user.email)

    return {
        "success": True,
        "message": "Branch created successfully",
        "data": _to_response(branch, {}),
    }


@router.put("/{branch_id}", response_model=APIResponse)
def update_branch(
    branch_id: uuid.UUID,
    branch_in: BranchUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_branch_staff),
):
    branch = get_branch_or_404(db, branch_id)
    update_dict = {
        key: value
        for key, value in branch_in.model_dump(exclude_unset=True).items()
        if value is not None or key not in REQUIRED_FIELDS
    }

    if "name" in update_dict and update_dict["name"] != branch.name:
        _ensure_unique_name(db, update_dict["name"], exclude_id=branch.id)
        for entry in branch.waiting_list_entries:
            entry.branch_name = update_dict["name"]

    for key, value in update_dict.items():
        setattr(branch, key, value)
    db.commit()
    db.refresh(branch)

    return {
        "success": True,
        "message": "Branch updated successfully",
        "data": _to_response(branch, waiting_counts(db)),
    }


@router.delete("/{branch_id}", response_model=APIResponse)
def delete_branch(
    branch_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_branch_staff),
):
    """Delete a branch; its waiting-list entries keep the branch label"""
    branch = get_branch_or_404(db, branch_id)
    db.delete(branch)
    db.commit()
    logger.info("Branch %s deleted by %s", branch_id, current_user.email)
    return {"success": True, "message": "Branch deleted successfully", "data": None}
