from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    Integer,
    JSON,
    ForeignKey,
    Enum,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from skills_hub.core.database import Base
import enum


class AdmissionStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class WaitingListStatus(str, enum.Enum):
    waiting = "waiting"
    contacted = "contacted"
    enrolled = "enrolled"
    rejected = "rejected"


class Admission(Base):
    __tablename__ = "admissions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    status = Column(Enum(AdmissionStatus), default=AdmissionStatus.pending)

    # Student Info
    full_name = Column(String, nullable=False)
    age = Column(String)
    date_of_birth = Column(String, nullable=False)
    gender = Column(String)
    address = Column(Text)
    email = Column(String, nullable=False)
    contact_number = Column(String, nullable=False)
    emergency_contact_number = Column(String)
    school_year = Column(String)
    school_name = Column(String)

    # Academic
    subjects = Column(JSON, nullable=False)  # list of subject names
    current_grade = Column(String)

    # Parent Info
    parent_name = Column(String, nullable=False)
    parent_contact = Column(String)
    parent_email = Column(String, nullable=False)

    submitted_by_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    submitted_at = Column(DateTime(timezone=True), server_default=func.now())

    waiting_list_entry = relationship(
        "WaitingListEntry", back_populates="admission", uselist=False
    )


class WaitingListEntry(Base):
    __tablename__ = "waiting_list"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    admission_id = Column(
        UUID(as_uuid=True), ForeignKey("admissions.id", ondelete="SET NULL"), nullable=True
    )
    branch_id = Column(
        UUID(as_uuid=True), ForeignKey("branches.id", ondelete="SET NULL"), nullable=True
    )

    student_name = Column(String, nullable=False)
    parent_name = Column(String, nullable=False)
    parent_email = Column(String, nullable=False)
    parent_phone = Column(String)
    desired_grade = Column(String, nullable=False)
    desired_subjects = Column(String)
    # Label kept in step with the linked branch
    branch_name = Column(String, default="Main Campus")
    application_date = Column(Date, server_default=func.current_date())
    status = Column(Enum(WaitingListStatus), default=WaitingListStatus.waiting)
    priority = Column(Integer, default=2)  # 1 = high, 3 = low
    notes = Column(Text)

    admission = relationship("Admission", back_populates="waiting_list_entry")
    branch = relationship("Branch", back_populates="waiting_list_entries")
