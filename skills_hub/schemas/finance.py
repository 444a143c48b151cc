from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime
from uuid import UUID

from skills_hub.models.finance import PayslipStatus

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


class PayslipCreate(BaseModel):
    teacher_id: UUID
    month: str = Field(pattern="^(" + "|".join(MONTHS) + ")$")
    year: int = Field(ge=2000, le=2100)
    base_salary: float = Field(ge=0)
    allowances: float = Field(default=0, ge=0)
    overtime: float = Field(default=0, ge=0)
    deductions: float = Field(default=0, ge=0)
    tax: float = Field(default=0, ge=0)
    pay_date: Optional[date] = None
    status: PayslipStatus = PayslipStatus.pending

    @property
    def net_pay(self) -> float:
        gross = self.base_salary + self.allowances + self.overtime
        return round(gross - self.deductions - self.tax, 2)


class PayslipStatusUpdate(BaseModel):
    status: PayslipStatus
    pay_date: Optional[date] = None


class PayslipResponse(BaseModel):
    id: UUID
    teacher_id: UUID
    month: str
    year: int
    base_salary: float
    allowances: float
    overtime: float
    deductions: float
    tax: float
    net_pay: float
    pay_date: Optional[date] = None
    status: PayslipStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PayslipSummary(BaseModel):
    payslips: List[PayslipResponse]
    total_earned: float
    average_monthly: float
    available_years: List[int]
