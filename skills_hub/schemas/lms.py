from typing import List, Optional
from uuid import UUID
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from skills_hub.models.lms import ResourceCategory, ResourceType
from skills_hub.utils.dates import as_utc


def _strip(value: Optional[str]) -> Optional[str]:
    return value.strip() if isinstance(value, str) else value


# --- Assignments ---


class AssignmentCreate(BaseModel):
    title: str = Field(min_length=3)
    description: Optional[str] = None
    due_date: datetime
    attachment_url: Optional[str] = None

    @field_validator("title", "description", "attachment_url", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)

    @field_validator("due_date")
    @classmethod
    def due_date_in_utc(cls, value):
        return as_utc(value)


class AssignmentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=3)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    attachment_url: Optional[str] = None

    @field_validator("title", "description", "attachment_url", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)

    @field_validator("due_date")
    @classmethod
    def due_date_in_utc(cls, value):
        return as_utc(value)


class AssignmentResponse(BaseModel):
    id: UUID
    teacher_id: UUID
    title: str
    description: Optional[str] = None
    due_date: datetime
    attachment_url: Optional[str] = None
    created_at: Optional[datetime] = None
    teacher_name: Optional[str] = None
    subject: Optional[str] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_assignment(cls, assignment) -> "AssignmentResponse":
        response = cls.model_validate(assignment)
        if assignment.teacher is not None:
            response.subject = assignment.teacher.subject
            response.teacher_name = assignment.teacher.user.name
        return response


# --- Classes (schedule) ---


class ClassCreate(BaseModel):
    subject: str = Field(min_length=2)
    start_time: datetime
    end_time: datetime
    meeting_link: Optional[str] = None

    @field_validator("subject", "meeting_link", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)

    # Naive times are UTC; stored as such whatever the server timezone
    @field_validator("start_time", "end_time")
    @classmethod
    def times_in_utc(cls, value):
        return as_utc(value)


class ClassUpdate(BaseModel):
    subject: Optional[str] = Field(default=None, min_length=2)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    meeting_link: Optional[str] = None

    @field_validator("subject", "meeting_link", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def times_in_utc(cls, value):
        return as_utc(value)


class ClassResponse(BaseModel):
    id: UUID
    teacher_id: UUID
    subject: str
    start_time: datetime
    end_time: datetime
    meeting_link: Optional[str] = None
    created_at: Optional[datetime] = None
    teacher_name: Optional[str] = None
    teacher_subject: Optional[str] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_class(cls, school_class) -> "ClassResponse":
        response = cls.model_validate(school_class)
        if school_class.teacher is not None:
            response.teacher_subject = school_class.teacher.subject
            response.teacher_name = school_class.teacher.user.name
        return response


# --- Submissions ---


class SubmissionCreate(BaseModel):
    assignment_id: UUID
    file_url: str = Field(min_length=1)

    @field_validator("file_url", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class SubmissionUpdate(BaseModel):
    file_url: str = Field(min_length=1)

    @field_validator("file_url", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class GradeSubmissionRequest(BaseModel):
    grade: float = Field(ge=0, le=100)
    feedback: Optional[str] = None

    @field_validator("feedback", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class SubmissionResponse(BaseModel):
    id: UUID
    assignment_id: UUID
    student_id: UUID
    file_url: str
    submitted_at: Optional[datetime] = None
    grade: Optional[float] = None
    feedback: Optional[str] = None
    assignment_title: Optional[str] = None
    due_date: Optional[datetime] = None
    student_name: Optional[str] = None
    student_email: Optional[str] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_submission(cls, submission) -> "SubmissionResponse":
        response = cls.model_validate(submission)
        if submission.assignment is not None:
            response.assignment_title = submission.assignment.title
            response.due_date = submission.assignment.due_date
        if submission.student is not None:
            response.student_name = submission.student.user.name
            response.student_email = submission.student.user.email
        return response


# --- Learning resources ---


class ResourceCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    type: ResourceType = ResourceType.pdf
    category: ResourceCategory = ResourceCategory.lesson_notes
    url: Optional[str] = None
    file_size: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("title", "description", "subject", "url", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class ResourceUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    subject: Optional[str] = Field(default=None, min_length=1)
    type: Optional[ResourceType] = None
    category: Optional[ResourceCategory] = None
    url: Optional[str] = None
    file_size: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("title", "description", "subject", "url", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class ResourceResponse(BaseModel):
    id: UUID
    teacher_id: UUID
    title: str
    description: str
    subject: str
    type: ResourceType
    category: ResourceCategory
    url: Optional[str] = None
    file_size: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    download_count: int = 0
    created_at: Optional[datetime] = None
    teacher_name: Optional[str] = None
    is_bookmarked: bool = False

    class Config:
        from_attributes = True

    @classmethod
    def from_resource(cls, resource, bookmarked: bool = False) -> "ResourceResponse":
        response = cls.model_validate(resource)
        if resource.teacher is not None:
            response.teacher_name = resource.teacher.user.name
        response.is_bookmarked = bookmarked
        return response
