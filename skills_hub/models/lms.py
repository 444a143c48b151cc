from sqlalchemy import (
    Column,
    String,
    DateTime,
    ForeignKey,
    Float,
    Integer,
    JSON,
    Enum,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from skills_hub.core.database import Base
import enum


class ResourceType(str, enum.Enum):
    pdf = "pdf"
    document = "document"
    image = "image"
    video = "video"
    link = "link"
    slides = "slides"
    other = "other"


class ResourceCategory(str, enum.Enum):
    lesson_notes = "lesson_notes"
    past_papers = "past_papers"
    worksheets = "worksheets"
    videos = "videos"
    reference = "reference"
    extra_reading = "extra_reading"


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    teacher_id = Column(
        UUID(as_uuid=True), ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False
    )
    title = Column(String, nullable=False)
    description = Column(Text)
    due_date = Column(DateTime(timezone=True), nullable=False)
    attachment_url = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    teacher = relationship("Teacher", back_populates="assignments")
    submissions = relationship(
        "Submission", back_populates="assignment", cascade="all, delete-orphan"
    )


class SchoolClass(Base):
    """A scheduled lesson; the table keeps its historical name ``classes``."""

    __tablename__ = "classes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    teacher_id = Column(
        UUID(as_uuid=True), ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False
    )
    subject = Column(String, nullable=False)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    meeting_link = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    teacher = relationship("Teacher", back_populates="classes")


class Submission(Base):
    __tablename__ = "submissions"
    __table_args__ = (
        UniqueConstraint("assignment_id", "student_id", name="uq_submission_student"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    assignment_id = Column(
        UUID(as_uuid=True), ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False
    )
    student_id = Column(
        UUID(as_uuid=True), ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    )
    file_url = Column(String, nullable=False)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now())
    grade = Column(Float, nullable=True)  # 0-100, NULL until graded
    feedback = Column(Text)

    assignment = relationship("Assignment", back_populates="submissions")
    student = relationship("Student", back_populates="submissions")


class LearningResource(Base):
    """Study material a teacher shares with students."""

    __tablename__ = "learning_resources"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    teacher_id = Column(
        UUID(as_uuid=True), ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False
    )
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    subject = Column(String, nullable=False)
    type = Column(Enum(ResourceType), default=ResourceType.pdf)
    category = Column(Enum(ResourceCategory), default=ResourceCategory.lesson_notes)
    url = Column(String)
    file_size = Column(String)  # display string, e.g. "2.4 MB"
    tags = Column(JSON, default=list)
    download_count = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    teacher = relationship("Teacher", back_populates="resources")
    bookmarks = relationship(
        "ResourceBookmark", back_populates="resource", cascade="all, delete-orphan"
    )


class ResourceBookmark(Base):
    __tablename__ = "resource_bookmarks"
    __table_args__ = (
        UniqueConstraint("resource_id", "student_id", name="uq_resource_bookmark"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    resource_id = Column(
        UUID(as_uuid=True),
        ForeignKey("learning_resources.id", ondelete="CASCADE"),
        nullable=False,
    )
    student_id = Column(
        UUID(as_uuid=True), ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    resource = relationship("LearningResource", back_populates="bookmarks")
    student = relationship("Student", back_populates="bookmarks")
