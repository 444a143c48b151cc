from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID


class UserResponse(BaseModel):
    """A user joined with whichever role profile they have."""

    id: UUID
    name: str
    email: str
    role: str
    is_active: bool = True
    created_at: Optional[datetime] = None

    # Teacher
    teacher_id: Optional[UUID] = None
    subject: Optional[str] = None
    # Student
    student_id: Optional[UUID] = None
    grade: Optional[str] = None
    # Parent (for students: the linked parent profile)
    parent_id: Optional[UUID] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        data = {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role.value if hasattr(user.role, "value") else user.role,
            "is_active": bool(user.is_active),
            "created_at": user.created_at,
        }
        if user.teacher:
            data.update(teacher_id=user.teacher.id, subject=user.teacher.subject)
        if user.student:
            data.update(
                student_id=user.student.id,
                grade=user.student.grade,
                parent_id=user.student.parent_id,
            )
        if user.parent:
            data.update(
                parent_id=user.parent.id,
                phone=user.parent.phone,
                address=user.parent.address,
            )
        return cls(**data)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2)
    email: Optional[str] = Field(default=None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    subject: Optional[str] = None
    grade: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: Optional[str]) -> Optional[str]:
        return value.strip().lower() if value else value
