from sqlalchemy import Column, String, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum
from skills_hub.core.database import Base


class UserRole(str, enum.Enum):
    admin = "admin"
    teacher = "teacher"
    student = "student"
    parent = "parent"
    hr_manager = "hr_manager"
    branch_manager = "branch_manager"


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    subject = Column(String)

    user = relationship("User", back_populates="teacher")
    assignments = relationship(
        "Assignment", back_populates="teacher", cascade="all, delete-orphan"
    )
    classes = relationship(
        "SchoolClass", back_populates="teacher", cascade="all, delete-orphan"
    )
    resources = relationship(
        "LearningResource", back_populates="teacher", cascade="all, delete-orphan"
    )
    payslips = relationship(
        "Payslip", back_populates="teacher", cascade="all, delete-orphan"
    )
    messages = relationship(
        "Message", back_populates="teacher", cascade="all, delete-orphan"
    )


class Parent(Base):
    __tablename__ = "parents"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    phone = Column(String)
    address = Column(Text)

    user = relationship("User", back_populates="parent")
    children = relationship("Student", back_populates="parent")
    messages = relationship(
        "Message", back_populates="parent", cascade="all, delete-orphan"
    )


class Student(Base):
    __tablename__ = "students"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    grade = Column(String)
    parent_id = Column(
        UUID(as_uuid=True), ForeignKey("parents.id", ondelete="SET NULL"), nullable=True
    )

    user = relationship("User", back_populates="student")
    parent = relationship("Parent", back_populates="children")
    submissions = relationship(
        "Submission", back_populates="student", cascade="all, delete-orphan"
    )
    bookmarks = relationship(
        "ResourceBookmark", back_populates="student", cascade="all, delete-orphan"
    )
