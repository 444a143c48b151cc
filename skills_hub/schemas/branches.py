from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from skills_hub.models.branches import BranchStatus

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class BranchBase(BaseModel):
    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    manager_name: str = Field(min_length=1)
    manager_email: str = Field(pattern=EMAIL_PATTERN)
    status: BranchStatus = BranchStatus.active

    @field_validator(
        "name", "address", "phone", "email", "manager_name", "manager_email", mode="before"
    )
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class BranchCreate(BranchBase):
    pass


class BranchUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    manager_name: Optional[str] = Field(default=None, min_length=1)
    manager_email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    status: Optional[BranchStatus] = None

    @field_validator(
        "name", "address", "phone", "email", "manager_name", "manager_email", mode="before"
    )
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class BranchResponse(BranchBase):
    id: UUID
    created_at: Optional[datetime] = None
    waiting_list_size: int = 0

    class Config:
        from_attributes = True
