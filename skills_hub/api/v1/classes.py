import uuid
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.core.errors import NotFoundError, ValidationError
from skills_hub.models import SchoolClass, Teacher, User
from skills_hub.schemas import APIResponse, ClassCreate, ClassResponse, ClassUpdate
from skills_hub.utils.dates import as_utc, utcnow

router = APIRouter()


def validate_time_range(start_time, end_time) -> None:
    if as_utc(start_time) >= as_utc(end_time):
        raise ValidationError("End time must be after start time")


def get_owned_class(db: Session, class_id: uuid.UUID, user: User) -> SchoolClass:
    query = db.query(SchoolClass).filter(SchoolClass.id == class_id)
    if not deps.is_admin(user):
        teacher_id = user.teacher.id if user.teacher else None
        query = query.filter(SchoolClass.teacher_id == teacher_id)
    school_class = query.first()
    if not school_class:
        raise NotFoundError("Class not found or access denied")
    return school_class


@router.get("", response_model=APIResponse)
def list_classes(
    upcoming: Optional[bool] = None,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """The class schedule ordered by start time"""
    query = db.query(SchoolClass)
    if upcoming:
        query = query.filter(SchoolClass.start_time > utcnow())
    classes = query.order_by(SchoolClass.start_time.asc()).all()
    return {
        "success": True,
        "message": "Classes retrieved successfully",
        "data": [ClassResponse.from_class(c) for c in classes],
    }


@router.get("/{class_id}", response_model=APIResponse)
def get_class(
    class_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    school_class = db.query(SchoolClass).filter(SchoolClass.id == class_id).first()
    if not school_class:
        raise NotFoundError("Class not found")
    return {
        "success": True,
        "message": "Class retrieved successfully",
        "data": ClassResponse.from_class(school_class),
    }


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
def schedule_class(
    class_in: ClassCreate,
    db: Session = Depends(deps.get_db),
    teacher: Teacher = Depends(deps.require_teacher_profile),
):
    """Schedule a new class (Teacher only)"""
    validate_time_range(class_in.start_time, class_in.end_time)

    school_class = SchoolClass(teacher_id=teacher.id, **class_in.model_dump())
    db.add(school_class)
    db.commit()
    db.refresh(school_class)

    return {
        "success": True,
        "message": "Class scheduled successfully",
        "data": ClassResponse.from_class(school_class),
    }


@router.put("/{class_id}", response_model=APIResponse)
def update_class(
    class_id: uuid.UUID,
    update_data: ClassUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.RoleChecker(["teacher"])),
):
    school_class = get_owned_class(db, class_id, current_user)
    update_dict = {
        key: value
        for key, value in update_data.model_dump(exclude_unset=True).items()
        if value is not None or key == "meeting_link"
    }

    validate_time_range(
        update_dict.get("start_time", school_class.start_time),
        update_dict.get("end_time", school_class.end_time),
    )

    for key, value in update_dict.items():
        setattr(school_class, key, value)
    db.commit()
    db.refresh(school_class)

    return {
        "success": True,
        "message": "Class updated successfully",
        "data": ClassResponse.from_class(school_class),
    }


@router.delete("/{class_id}", response_model=APIResponse)
def delete_class(
    class_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.RoleChecker(["teacher"])),
):
    school_class = get_owned_class(db, class_id, current_user)
    db.delete(school_class)
    db.commit()
    return {"success": True, "message": "Class deleted successfully", "data": None}
