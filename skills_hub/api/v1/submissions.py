import uuid
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.core.errors import ConflictError, ForbiddenError, NotFoundError
from skills_hub.models import (
    Assignment,
    NotificationType,
    Student,
    Submission,
    User,
    UserRole,
)
from skills_hub.schemas import (
    APIResponse,
    GradeSubmissionRequest,
    SubmissionCreate,
    SubmissionResponse,
    SubmissionUpdate,
)
from skills_hub.services.notifications import notify_users
from skills_hub.utils.dates import utcnow

router = APIRouter()


def get_own_submission(db: Session, submission_id: uuid.UUID, student: Student) -> Submission:
    submission = db.query(Submission).filter(
        Submission.id == submission_id,
        Submission.student_id == student.id,
    ).first()
    if not submission:
        raise NotFoundError("Submission not found or access denied")
    return submission


@router.get("", response_model=APIResponse)
def list_submissions(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.RoleChecker(["teacher"])),
):
    """All submissions, most recent first (Teacher only)"""
    submissions = db.query(Submission).order_by(Submission.submitted_at.desc()).all()
    return {
        "success": True,
        "message": "Submissions retrieved successfully",
        "data": [SubmissionResponse.from_submission(s) for s in submissions],
    }


@router.get("/{submission_id}", response_model=APIResponse)
def get_submission(
    submission_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    submission = db.query(Submission).filter(Submission.id == submission_id).first()
    if not submission:
        raise NotFoundError("Submission not found")

    # Students only see their own work
    if current_user.role == UserRole.student:
        if not current_user.student or submission.student_id != current_user.student.id:
            raise ForbiddenError("Insufficient permissions")

    return {
        "success": True,
        "message": "Submission retrieved successfully",
        "data": SubmissionResponse.from_submission(submission),
    }


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
def submit_assignment(
    submission_in: SubmissionCreate,
    db: Session = Depends(deps.get_db),
    student: Student = Depends(deps.require_student_profile),
):
    """Submit an assignment (Student only)"""
    assignment = db.query(Assignment).filter(Assignment.id == submission_in.assignment_id).first()
    if not assignment:
        raise NotFoundError("Assignment not found")

    existing = db.query(Submission).filter(
        Submission.assignment_id == assignment.id,
        Submission.student_id == student.id,
    ).first()
    if existing:
        raise ConflictError("Submission already exists for this assignment")

    submission = Submission(
        assignment_id=assignment.id,
        student_id=student.id,
        file_url=submission_in.file_url,
    )
    db.add(submission)
    db.commit()
    db.refresh(submission)

    return {
        "success": True,
        "message": "Assignment submitted successfully",
        "data": SubmissionResponse.from_submission(submission),
    }


@router.put("/{submission_id}/grade", response_model=APIResponse)
def grade_submission(
    submission_id: uuid.UUID,
    grade_data: GradeSubmissionRequest,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.RoleChecker(["teacher"])),
):
    """Grade a submission (Teacher only)"""
    submission = db.query(Submission).filter(Submission.id == submission_id).first()
    if not submission:
        raise NotFoundError("Submission not found")

    submission.grade = grade_data.grade
    submission.feedback = grade_data.feedback

    notify_users(
        db,
        [submission.student.user],
        NotificationType.assignment,
        title="Submission graded",
        message=f"{submission.assignment.title}: {grade_data.grade:g}/100",
    )
    db.commit()
    db.refresh(submission)

    return {
        "success": True,
        "message": "Submission graded successfully",
        "data": SubmissionResponse.from_submission(submission),
    }


@router.put("/{submission_id}", response_model=APIResponse)
def update_submission(
    submission_id: uuid.UUID,
    submission_in: SubmissionUpdate,
    db: Session = Depends(deps.get_db),
    student: Student = Depends(deps.require_student_profile),
):
    """Replace the submitted file (owning student only)"""
    submission = get_own_submission(db, submission_id, student)
    submission.file_url = submission_in.file_url
    submission.submitted_at = utcnow()
    db.commit()
    db.refresh(submission)

    return {
        "success": True,
        "message": "Submission updated successfully",
        "data": SubmissionResponse.from_submission(submission),
    }


@router.delete("/{submission_id}", response_model=APIResponse)
def delete_submission(
    submission_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    student: Student = Depends(deps.require_student_profile),
):
    submission = get_own_submission(db, submission_id, student)
    db.delete(submission)
    db.commit()
    return {"success": True, "message": "Submission deleted successfully", "data": None}
