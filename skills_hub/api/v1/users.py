import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.core.errors import ForbiddenError, NotFoundError
from skills_hub.models import User, UserRole
from skills_hub.schemas import APIResponse, UserResponse, UserUpdate

router = APIRouter()


def _get_user_or_404(db: Session, user_id: uuid.UUID) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def _ensure_self_or_admin(current_user: User, user_id: uuid.UUID) -> None:
    if not deps.is_admin(current_user) and current_user.id != user_id:
        raise ForbiddenError("Insufficient permissions")


@router.get("", response_model=APIResponse)
def list_users(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    """All users, newest first (Admin only)"""
    users = db.query(User).order_by(User.created_at.desc()).all()
    return {
        "success": True,
        "message": "Users retrieved successfully",
        "data": [UserResponse.from_user(u) for u in users],
    }


@router.get("/{user_id}", response_model=APIResponse)
def get_user(
    user_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    _ensure_self_or_admin(current_user, user_id)
    user = _get_user_or_404(db, user_id)
    return {
        "success": True,
        "message": "User retrieved successfully",
        "data": UserResponse.from_user(user),
    }


@router.put("/{user_id}", response_model=APIResponse)
def update_user(
    user_id: uuid.UUID,
    user_in: UserUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Update account fields and the role-specific profile"""
    _ensure_self_or_admin(current_user, user_id)
    user = _get_user_or_404(db, user_id)
    update_dict = user_in.model_dump(exclude_unset=True)

    if update_dict.get("name"):
        user.name = update_dict["name"]
    if update_dict.get("email"):
        user.email = update_dict["email"]

    if user.role == UserRole.teacher and user.teacher and update_dict.get("subject"):
        user.teacher.subject = update_dict["subject"]
    elif user.role == UserRole.student and user.student and update_dict.get("grade"):
        user.student.grade = update_dict["grade"]
    elif user.role == UserRole.parent and user.parent:
        for field in ("phone", "address"):
            if update_dict.get(field):
                setattr(user.parent, field, update_dict[field])

    # A duplicate email surfaces as a unique violation (409)
    db.commit()
    db.refresh(user)

    return {
        "success": True,
        "message": "User updated successfully",
        "data": UserResponse.from_user(user),
    }


@router.delete("/{user_id}", response_model=APIResponse)
def delete_user(
    user_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    """Delete a user and everything they own (Admin only)"""
    user = _get_user_or_404(db, user_id)
    db.delete(user)
    db.commit()
    return {"success": True, "message": "User deleted successfully", "data": None}
