import uuid
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.core.errors import NotFoundError
from skills_hub.models import (
    Assignment,
    NotificationType,
    Teacher,
    User,
    UserRole,
)
from skills_hub.schemas import (
    APIResponse,
    AssignmentCreate,
    AssignmentResponse,
    AssignmentUpdate,
)
from skills_hub.services.notifications import notify_role

router = APIRouter()


def get_owned_assignment(db: Session, assignment_id: uuid.UUID, user: User) -> Assignment:
    """The assignment if ``user`` may change it: its teacher, or an admin."""
    query = db.query(Assignment).filter(Assignment.id == assignment_id)
    if not deps.is_admin(user):
        teacher_id = user.teacher.id if user.teacher else None
        query = query.filter(Assignment.teacher_id == teacher_id)
    assignment = query.first()
    if not assignment:
        raise NotFoundError("Assignment not found or access denied")
    return assignment


@router.get("", response_model=APIResponse)
def list_assignments(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """All assignments, soonest due first"""
    assignments = db.query(Assignment).order_by(Assignment.due_date.asc()).all()
    return {
        "success": True,
        "message": "Assignments retrieved successfully",
        "data": [AssignmentResponse.from_assignment(a) for a in assignments],
    }


@router.get("/{assignment_id}", response_model=APIResponse)
def get_assignment(
    assignment_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()
    if not assignment:
        raise NotFoundError("Assignment not found")
    return {
        "success": True,
        "message": "Assignment retrieved successfully",
        "data": AssignmentResponse.from_assignment(assignment),
    }


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
def create_assignment(
    assignment_in: AssignmentCreate,
    db: Session = Depends(deps.get_db),
    teacher: Teacher = Depends(deps.require_teacher_profile),
):
    """Create a new assignment (Teacher only)"""
    assignment = Assignment(teacher_id=teacher.id, **assignment_in.model_dump())
    db.add(assignment)

    notify_role(
        db,
        UserRole.student,
        NotificationType.assignment,
        title="New assignment",
        message=f"{assignment.title} is due {assignment.due_date:%Y-%m-%d}",
    )
    db.commit()
    db.refresh(assignment)

    return {
        "success": True,
        "message": "Assignment created successfully",
        "data": AssignmentResponse.from_assignment(assignment),
    }


@router.put("/{assignment_id}", response_model=APIResponse)
def update_assignment(
    assignment_id: uuid.UUID,
    update_data: AssignmentUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.RoleChecker(["teacher"])),
):
    """Update assignment details (owning teacher only)"""
    assignment = get_owned_assignment(db, assignment_id, current_user)

    update_dict = update_data.model_dump(exclude_unset=True)
    for key, value in update_dict.items():
        # title and due_date are required columns
        if value is None and key in ("title", "due_date"):
            continue
        setattr(assignment, key, value)

    db.commit()
    db.refresh(assignment)

    return {
        "success": True,
        "message": "Assignment updated successfully",
        "data": AssignmentResponse.from_assignment(assignment),
    }


@router.delete("/{assignment_id}", response_model=APIResponse)
def delete_assignment(
    assignment_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.RoleChecker(["teacher"])),
):
    """Delete an assignment and its submissions (owning teacher only)"""
    assignment = get_owned_assignment(db, assignment_id, current_user)
    db.delete(assignment)
    db.commit()

    return {"success": True, "message": "Assignment deleted successfully", "data": None}
