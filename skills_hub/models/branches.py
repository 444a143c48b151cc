from sqlalchemy import Column, String, DateTime, Enum, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from skills_hub.core.database import Base
import enum

# Online admissions are queued here
DEFAULT_BRANCH_NAME = "Main Campus"


class BranchStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    maintenance = "maintenance"


class Branch(Base):
    """A school campus; waiting-list applicants are queued per branch."""

    __tablename__ = "branches"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, unique=True, nullable=False)
    address = Column(Text, nullable=False)
    phone = Column(String, nullable=False)
    email = Column(String, nullable=False)
    manager_name = Column(String, nullable=False)
    manager_email = Column(String, nullable=False)
    status = Column(Enum(BranchStatus), default=BranchStatus.active)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    waiting_list_entries = relationship("WaitingListEntry", back_populates="branch")
