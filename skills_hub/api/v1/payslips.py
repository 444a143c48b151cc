import logging
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy import case
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.core.errors import ConflictError, NotFoundError
from skills_hub.models import Payslip, Teacher, User
from skills_hub.schemas import (
    APIResponse,
    PayslipCreate,
    PayslipResponse,
    PayslipStatusUpdate,
    PayslipSummary,
)
from skills_hub.schemas.finance import MONTHS

logger = logging.getLogger(__name__)

router = APIRouter()

require_payroll = deps.RoleChecker(["hr_manager"])

# Calendar order for "newest first" within a year
_month_number = case(
    {name: index for index, name in enumerate(MONTHS, start=1)},
    value=Payslip.month,
    else_=0,
)


def _newest_first(query):
    return query.order_by(Payslip.year.desc(), _month_number.desc())


@router.get("/my", response_model=APIResponse)
def my_payslips(
    year: Optional[int] = None,
    db: Session = Depends(deps.get_db),
    teacher: Teacher = Depends(deps.require_teacher_profile),
):
    """The caller's payslips with earning totals"""
    available_years = [
        row[0]
        for row in db.query(Payslip.year)
        .filter(Payslip.teacher_id == teacher.id)
        .distinct()
        .order_by(Payslip.year.desc())
        .all()
    ]

    query = db.query(Payslip).filter(Payslip.teacher_id == teacher.id)
    if year is not None:
        query = query.filter(Payslip.year == year)
    payslips = [PayslipResponse.model_validate(p) for p in _newest_first(query).all()]

    total_earned = round(sum(p.net_pay for p in payslips), 2)
    average_monthly = round(total_earned / len(payslips), 2) if payslips else 0.0

    return {
        "success": True,
        "message": "Payslips retrieved successfully",
        "data": PayslipSummary(
            payslips=payslips,
            total_earned=total_earned,
            average_monthly=average_monthly,
            available_years=available_years,
        ),
    }


@router.get("", response_model=APIResponse)
def list_payslips(
    teacher_id: Optional[uuid.UUID] = None,
    year: Optional[int] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_payroll),
):
    query = db.query(Payslip)
    if teacher_id:
        query = query.filter(Payslip.teacher_id == teacher_id)
    if year is not None:
        query = query.filter(Payslip.year == year)
    payslips = _newest_first(query).all()
    return {
        "success": True,
        "message": "Payslips retrieved successfully",
        "data": [PayslipResponse.model_validate(p) for p in payslips],
    }


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
def create_payslip(
    payslip_in: PayslipCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_payroll),
):
    """Issue a payslip; net pay is computed from the components"""
    if not db.query(Teacher).filter(Teacher.id == payslip_in.teacher_id).first():
        raise NotFoundError("Teacher not found")

    existing = db.query(Payslip).filter(
        Payslip.teacher_id == payslip_in.teacher_id,
        Payslip.month == payslip_in.month,
        Payslip.year == payslip_in.year,
    ).first()
    if existing:
        raise ConflictError(
            f"Payslip for {payslip_in.month} {payslip_in.year} already exists"
        )

    payslip = Payslip(**payslip_in.model_dump(), net_pay=payslip_in.net_pay)
    db.add(payslip)
    db.commit()
    db.refresh(payslip)
    logger.info(
        "Payslip %s %s issued for teacher %s by %s",
        payslip.month, payslip.year, payslip.teacher_id, current_user.email,
    )

    return {
        "success": True,
        "message": "Payslip created successfully",
        "data": PayslipResponse.model_validate(payslip),
    }


@router.patch("/{payslip_id}/status", response_model=APIResponse)
def update_payslip_status(
    payslip_id: uuid.UUID,
    status_in: PayslipStatusUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(require_payroll),
):
    payslip = db.query(Payslip).filter(Payslip.id == payslip_id).first()
    if not payslip:
        raise NotFoundError("Payslip not found")

    payslip.status = status_in.status
    if status_in.pay_date:
        payslip.pay_date = status_in.pay_date
    db.commit()
    db.refresh(payslip)

    return {
        "success": True,
        "message": "Payslip status updated",
        "data": PayslipResponse.model_validate(payslip),
    }
