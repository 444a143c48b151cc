import logging
from typing import Iterable, List

from sqlalchemy.orm import Session

from skills_hub.models import (
    Notification,
    NotificationPriority,
    NotificationType,
    User,
    UserRole,
)

logger = logging.getLogger(__name__)


def notify_users(
    db: Session,
    users: Iterable[User],
    type: NotificationType,
    title: str,
    message: str,
    priority: NotificationPriority = NotificationPriority.medium,
) -> List[Notification]:
    """Queue one notification per user on the session; the caller commits."""
    created = []
    for user in users:
        notification = Notification(
            user_id=user.id,
            type=type,
            title=title,
            message=message,
            priority=priority,
        )
        db.add(notification)
        created.append(notification)
    logger.debug("Queued %d '%s' notifications", len(created), type.value)
    return created


def notify_role(
    db: Session,
    role: UserRole,
    type: NotificationType,
    title: str,
    message: str,
    priority: NotificationPriority = NotificationPriority.medium,
) -> List[Notification]:
    users = db.query(User).filter(User.role == role, User.is_active == True).all()
    return notify_users(db, users, type, title, message, priority)
