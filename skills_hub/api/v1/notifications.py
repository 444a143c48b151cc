import logging
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.core.errors import NotFoundError, ValidationError
from skills_hub.models import Notification, NotificationType, User, UserRole
from skills_hub.schemas import APIResponse, NotificationCreate, NotificationResponse
from skills_hub.services.notifications import notify_role, notify_users

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_own_notification(db: Session, notification_id: uuid.UUID, user: User) -> Notification:
    notification = db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.user_id == user.id,
    ).first()
    if not notification:
        raise NotFoundError("Notification not found")
    return notification


@router.get("", response_model=APIResponse)
def list_notifications(
    type: Optional[NotificationType] = None,
    unread_only: bool = False,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    query = db.query(Notification).filter(Notification.user_id == current_user.id)
    if type:
        query = query.filter(Notification.type == type)
    if unread_only:
        query = query.filter(Notification.is_read == False)

    notifications = query.order_by(Notification.created_at.desc()).all()
    return {
        "success": True,
        "message": "Notifications retrieved successfully",
        "data": [NotificationResponse.model_validate(n) for n in notifications],
    }


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
def create_notification(
    notification_in: NotificationCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    """Send to one user or broadcast to a role (Admin only)"""
    fields = dict(
        type=notification_in.type,
        title=notification_in.title,
        message=notification_in.message,
        priority=notification_in.priority,
    )

    if notification_in.user_id:
        user = db.query(User).filter(User.id == notification_in.user_id).first()
        if not user:
            raise NotFoundError("User not found")
        created = notify_users(db, [user], **fields)
    elif notification_in.role:
        try:
            role = UserRole(notification_in.role)
        except ValueError:
            raise ValidationError(f"Unknown role '{notification_in.role}'")
        created = notify_role(db, role, **fields)
    else:
        raise ValidationError("Either user_id or role is required")

    db.commit()
    for notification in created:
        db.refresh(notification)
    logger.info("%s sent %d notifications", current_user.email, len(created))

    return {
        "success": True,
        "message": f"{len(created)} notification(s) sent",
        "data": [NotificationResponse.model_validate(n) for n in created],
    }


@router.patch("/{notification_id}/read", response_model=APIResponse)
def mark_notification_read(
    notification_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    notification = _get_own_notification(db, notification_id, current_user)
    notification.is_read = True
    db.commit()
    db.refresh(notification)
    return {
        "success": True,
        "message": "Notification marked as read",
        "data": NotificationResponse.model_validate(notification),
    }


@router.post("/read-all", response_model=APIResponse)
def mark_all_read(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    updated = (
        db.query(Notification)
        .filter(Notification.user_id == current_user.id, Notification.is_read == False)
        .update({Notification.is_read: True}, synchronize_session=False)
    )
    db.commit()
    return {
        "success": True,
        "message": "All notifications marked as read",
        "data": {"updated": updated},
    }


@router.delete("/{notification_id}", response_model=APIResponse)
def delete_notification(
    notification_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    notification = _get_own_notification(db, notification_id, current_user)
    db.delete(notification)
    db.commit()
    return {"success": True, "message": "Notification deleted", "data": None}
