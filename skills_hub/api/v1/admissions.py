import logging
import uuid
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.core.errors import NotFoundError
from skills_hub.models import (
    Admission,
    AdmissionStatus,
    Branch,
    DEFAULT_BRANCH_NAME,
    User,
    WaitingListEntry,
    WaitingListStatus,
)
from skills_hub.schemas import (
    AdmissionCreate,
    AdmissionResponse,
    AdmissionStatusUpdate,
    APIResponse,
    WaitingListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def waiting_entry_for(
    admission: Admission, branch: Optional[Branch] = None
) -> WaitingListEntry:
    """The waiting-list row an online application lands in."""
    return WaitingListEntry(
        admission=admission,
        branch=branch,
        student_name=admission.full_name,
        parent_name=admission.parent_name,
        parent_email=admission.parent_email,
        parent_phone=admission.parent_contact,
        desired_grade=admission.current_grade or admission.school_year or "Not specified",
        desired_subjects=", ".join(admission.subjects),
        branch_name=DEFAULT_BRANCH_NAME,
        application_date=date.today(),
        status=WaitingListStatus.waiting,
        priority=2,
        notes=(
            f"Online admission form - Age: {admission.age or ''}, "
            f"School: {admission.school_name or ''}"
        ),
    )


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
def submit_admission(
    admission_in: AdmissionCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Submit an admission form; it is queued on the waiting list"""
    admission = Admission(
        **admission_in.model_dump(),
        status=AdmissionStatus.pending,
        submitted_by_id=current_user.id,
    )
    branch = db.query(Branch).filter(Branch.name == DEFAULT_BRANCH_NAME).first()
    entry = waiting_entry_for(admission, branch)
    db.add(admission)
    db.add(entry)
    db.commit()
    db.refresh(admission)
    db.refresh(entry)
    logger.info("Admission %s submitted for %s", admission.id, admission.full_name)

    return {
        "success": True,
        "message": "Application submitted successfully",
        "data": {
            "admission": AdmissionResponse.model_validate(admission),
            "waiting_list_entry": WaitingListResponse.model_validate(entry),
        },
    }


@router.get("", response_model=APIResponse)
def list_admissions(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    admissions = db.query(Admission).order_by(Admission.submitted_at.desc()).all()
    return {
        "success": True,
        "message": "Admissions retrieved successfully",
        "data": [AdmissionResponse.model_validate(a) for a in admissions],
    }


@router.patch("/{admission_id}/status", response_model=APIResponse)
def update_admission_status(
    admission_id: uuid.UUID,
    status_in: AdmissionStatusUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    admission = db.query(Admission).filter(Admission.id == admission_id).first()
    if not admission:
        raise NotFoundError("Admission not found")

    admission.status = status_in.status
    db.commit()
    db.refresh(admission)

    return {
        "success": True,
        "message": f"Admission {admission.status.value}",
        "data": AdmissionResponse.model_validate(admission),
    }
