from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field, field_validator


class TokenPayload(BaseModel):
    sub: Optional[str] = None
    role: Optional[str] = None


class Login(BaseModel):
    # Plain string: the demo shortcuts ("admin", "teacher", ...) are not emails
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class RegisterRequest(BaseModel):
    name: str = Field(min_length=2)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6)
    role: str = Field(pattern=r"^(teacher|student|parent)$")
    subject: Optional[str] = None
    grade: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    parent_id: Optional[UUID] = None

    @field_validator("name", "subject", "grade", "phone", "address")
    @classmethod
    def strip_text(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=6)
    new_password: str = Field(min_length=6)
