import uuid
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.core.errors import ForbiddenError, NotFoundError, ValidationError
from skills_hub.models import Message, MessageSender, Parent, Teacher, User, UserRole
from skills_hub.schemas import APIResponse, MessageCreate, MessageResponse, ParentContact

router = APIRouter()


def _participant(user: User):
    """The caller's side of a conversation: (sender, profile)."""
    if user.role == UserRole.teacher and user.teacher:
        return MessageSender.teacher, user.teacher
    if user.role == UserRole.parent and user.parent:
        return MessageSender.parent, user.parent
    raise ForbiddenError("Only teachers and parents can use messages")


@router.get("/parents", response_model=APIResponse)
def list_parents(
    db: Session = Depends(deps.get_db),
    teacher: Teacher = Depends(deps.require_teacher_profile),
):
    """Parents a teacher can write to, with their children's names"""
    parents = db.query(Parent).join(User).order_by(User.name.asc()).all()
    return {
        "success": True,
        "message": "Parents retrieved successfully",
        "data": [
            ParentContact(
                id=p.id,
                name=p.user.name,
                email=p.user.email,
                phone=p.phone,
                children=[child.user.name for child in p.children],
            )
            for p in parents
        ],
    }


@router.get("", response_model=APIResponse)
def list_messages(
    counterpart_id: Optional[uuid.UUID] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """The caller's conversations, newest first"""
    sender, profile = _participant(current_user)
    if sender == MessageSender.teacher:
        query = db.query(Message).filter(Message.teacher_id == profile.id)
        if counterpart_id:
            query = query.filter(Message.parent_id == counterpart_id)
    else:
        query = db.query(Message).filter(Message.parent_id == profile.id)
        if counterpart_id:
            query = query.filter(Message.teacher_id == counterpart_id)

    messages = query.order_by(Message.sent_at.desc()).all()
    return {
        "success": True,
        "message": "Messages retrieved successfully",
        "data": [MessageResponse.model_validate(m) for m in messages],
    }


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
def send_message(
    message_in: MessageCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    sender, profile = _participant(current_user)

    if sender == MessageSender.teacher:
        if not message_in.parent_id:
            raise ValidationError("parent_id is required")
        if not db.query(Parent).filter(Parent.id == message_in.parent_id).first():
            raise NotFoundError("Parent not found")
        parent_id, teacher_id = message_in.parent_id, profile.id
    else:
        if not message_in.teacher_id:
            raise ValidationError("teacher_id is required")
        if not db.query(Teacher).filter(Teacher.id == message_in.teacher_id).first():
            raise NotFoundError("Teacher not found")
        parent_id, teacher_id = profile.id, message_in.teacher_id

    message = Message(
        parent_id=parent_id,
        teacher_id=teacher_id,
        sender=sender,
        subject=message_in.subject,
        content=message_in.content,
    )
    db.add(message)
    db.commit()
    db.refresh(message)

    return {
        "success": True,
        "message": "Message sent successfully",
        "data": MessageResponse.model_validate(message),
    }


@router.patch("/{message_id}/read", response_model=APIResponse)
def mark_message_read(
    message_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    sender, profile = _participant(current_user)
    message = db.query(Message).filter(Message.id == message_id).first()

    # Only the receiving side may mark a message read
    if sender == MessageSender.teacher:
        is_recipient = message is not None and message.teacher_id == profile.id
    else:
        is_recipient = message is not None and message.parent_id == profile.id
    if not is_recipient or message.sender == sender:
        raise NotFoundError("Message not found")

    message.is_read = True
    db.commit()
    db.refresh(message)

    return {
        "success": True,
        "message": "Message marked as read",
        "data": MessageResponse.model_validate(message),
    }
