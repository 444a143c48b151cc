from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime
from uuid import UUID

from skills_hub.models.applications import AdmissionStatus, WaitingListStatus


class AdmissionCreate(BaseModel):
    # Student Information
    full_name: str = Field(min_length=1)
    age: Optional[str] = None
    date_of_birth: str = Field(min_length=1)
    gender: Optional[str] = "Male"
    address: Optional[str] = None
    email: str = Field(min_length=1)
    contact_number: str = Field(min_length=1)
    emergency_contact_number: Optional[str] = None
    school_year: Optional[str] = None
    school_name: Optional[str] = None

    # Academic Information
    subjects: List[str] = Field(min_length=1)
    current_grade: Optional[str] = None

    # Parent Information
    parent_name: str = Field(min_length=1)
    parent_contact: Optional[str] = None
    parent_email: str = Field(min_length=1)


class AdmissionResponse(AdmissionCreate):
    id: UUID
    status: AdmissionStatus
    submitted_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AdmissionStatusUpdate(BaseModel):
    status: AdmissionStatus


class WaitingListBase(BaseModel):
    student_name: str = Field(min_length=1)
    parent_name: str = Field(min_length=1)
    parent_email: str = Field(min_length=1)
    parent_phone: Optional[str] = None
    desired_grade: str = Field(min_length=1)
    desired_subjects: Optional[str] = None
    branch_id: Optional[UUID] = None
    branch_name: str = "Main Campus"
    priority: int = Field(default=2, ge=1, le=3)
    notes: Optional[str] = None


class WaitingListCreate(WaitingListBase):
    pass


class WaitingListUpdate(BaseModel):
    student_name: Optional[str] = Field(default=None, min_length=1)
    parent_name: Optional[str] = Field(default=None, min_length=1)
    parent_email: Optional[str] = Field(default=None, min_length=1)
    parent_phone: Optional[str] = None
    desired_grade: Optional[str] = Field(default=None, min_length=1)
    desired_subjects: Optional[str] = None
    branch_id: Optional[UUID] = None
    branch_name: Optional[str] = None
    priority: Optional[int] = Field(default=None, ge=1, le=3)
    notes: Optional[str] = None


class WaitingListStatusUpdate(BaseModel):
    status: WaitingListStatus


class WaitingListResponse(WaitingListBase):
    id: UUID
    admission_id: Optional[UUID] = None
    application_date: Optional[date] = None
    status: WaitingListStatus

    class Config:
        from_attributes = True
