from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from skills_hub.models.communication import (
    MessageSender,
    NotificationType,
    NotificationPriority,
)


# --- Parent-teacher messages ---


class MessageCreate(BaseModel):
    # Teachers address a parent, parents address a teacher
    parent_id: Optional[UUID] = None
    teacher_id: Optional[UUID] = None
    subject: str = Field(min_length=1)
    content: str = Field(min_length=1)


class MessageResponse(BaseModel):
    id: UUID
    parent_id: UUID
    teacher_id: UUID
    sender: MessageSender
    subject: Optional[str] = None
    content: str
    is_read: bool
    sent_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ParentContact(BaseModel):
    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    children: List[str] = []


# --- Notifications ---


class NotificationCreate(BaseModel):
    user_id: Optional[UUID] = None
    role: Optional[str] = None
    type: NotificationType = NotificationType.system
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    priority: NotificationPriority = NotificationPriority.medium


class NotificationResponse(BaseModel):
    id: UUID
    user_id: UUID
    type: NotificationType
    title: str
    message: str
    priority: NotificationPriority
    is_read: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
