from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    Enum,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid
import enum
from skills_hub.core.database import Base


class PayslipStatus(str, enum.Enum):
    paid = "paid"
    pending = "pending"
    processing = "processing"


class Payslip(Base):
    __tablename__ = "payslips"
    __table_args__ = (
        UniqueConstraint("teacher_id", "month", "year", name="uq_payslip_period"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    teacher_id = Column(
        UUID(as_uuid=True), ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False
    )
    month = Column(String, nullable=False)  # e.g. "January"
    year = Column(Integer, nullable=False)

    base_salary = Column(Numeric(10, 2), nullable=False)
    allowances = Column(Numeric(10, 2), default=0)
    overtime = Column(Numeric(10, 2), default=0)
    deductions = Column(Numeric(10, 2), default=0)
    tax = Column(Numeric(10, 2), default=0)
    net_pay = Column(Numeric(10, 2), nullable=False)

    pay_date = Column(Date)
    status = Column(Enum(PayslipStatus), default=PayslipStatus.pending)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    teacher = relationship("Teacher", back_populates="payslips")
