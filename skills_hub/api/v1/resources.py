import uuid
from typing import Optional, Set
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.core.errors import NotFoundError
from skills_hub.models import (
    LearningResource,
    ResourceBookmark,
    ResourceCategory,
    ResourceType,
    Student,
    Teacher,
    User,
    UserRole,
)
from skills_hub.schemas import (
    APIResponse,
    ResourceCreate,
    ResourceResponse,
    ResourceUpdate,
)

router = APIRouter()

SORT_ORDERS = {
    "date": LearningResource.created_at.desc(),
    "name": LearningResource.title.asc(),
    "type": LearningResource.type.asc(),
    "downloads": LearningResource.download_count.desc(),
}

# Columns that are NOT NULL; a null in an update leaves them as they are
REQUIRED_FIELDS = ("title", "description", "subject", "type", "category", "tags")


def _get_resource_or_404(db: Session, resource_id: uuid.UUID) -> LearningResource:
    resource = db.query(LearningResource).filter(LearningResource.id == resource_id).first()
    if not resource:
        raise NotFoundError("Resource not found")
    return resource


def get_owned_resource(db: Session, resource_id: uuid.UUID, user: User) -> LearningResource:
    """The resource if ``user`` may change it: its teacher, or an admin."""
    query = db.query(LearningResource).filter(LearningResource.id == resource_id)
    if not deps.is_admin(user):
        teacher_id = user.teacher.id if user.teacher else None
        query = query.filter(LearningResource.teacher_id == teacher_id)
    resource = query.first()
    if not resource:
        raise NotFoundError("Resource not found or access denied")
    return resource


def bookmarked_ids(db: Session, user: User) -> Set[uuid.UUID]:
    if user.role != UserRole.student or not user.student:
        return set()
    rows = (
        db.query(ResourceBookmark.resource_id)
        .filter(ResourceBookmark.student_id == user.student.id)
        .all()
    )
    return {resource_id for (resource_id,) in rows}


@router.get("", response_model=APIResponse)
def list_resources(
    search: Optional[str] = None,
    type: Optional[ResourceType] = None,
    category: Optional[ResourceCategory] = None,
    subject: Optional[str] = None,
    mine: bool = False,
    sort: str = Query("date", pattern="^(date|name|type|downloads)$"),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Shared learning resources; teachers can narrow to their own with ``mine``"""
    query = db.query(LearningResource)

    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                LearningResource.title.ilike(pattern),
                LearningResource.description.ilike(pattern),
                LearningResource.subject.ilike(pattern),
            )
        )
    if type:
        query = query.filter(LearningResource.type == type)
    if category:
        query = query.filter(LearningResource.category == category)
    if subject:
        query = query.filter(LearningResource.subject == subject)
    if mine:
        teacher_id = current_user.teacher.id if current_user.teacher else None
        query = query.filter(LearningResource.teacher_id == teacher_id)

    resources = query.order_by(SORT_ORDERS[sort], LearningResource.title.asc()).all()
    bookmarks = bookmarked_ids(db, current_user)
    return {
        "success": True,
        "message": "Resources retrieved successfully",
        "data": [ResourceResponse.from_resource(r, r.id in bookmarks) for r in resources],
    }


@router.get("/bookmarks", response_model=APIResponse)
def list_bookmarked_resources(
    db: Session = Depends(deps.get_db),
    student: Student = Depends(deps.require_student_profile),
):
    """The calling student's bookmarked resources, latest bookmark first"""
    bookmarks = (
        db.query(ResourceBookmark)
        .filter(ResourceBookmark.student_id == student.id)
        .order_by(ResourceBookmark.created_at.desc())
        .all()
    )
    return {
        "success": True,
        "message": "Bookmarks retrieved successfully",
        "data": [ResourceResponse.from_resource(b.resource, True) for b in bookmarks],
    }


@router.get("/{resource_id}", response_model=APIResponse)
def get_resource(
    resource_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    resource = _get_resource_or_404(db, resource_id)
    return {
        "success": True,
        "message": "Resource retrieved successfully",
        "data": ResourceResponse.from_resource(
            resource, resource.id in bookmarked_ids(db, current_user)
        ),
    }


@router.post("", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
def create_resource(
    resource_in: ResourceCreate,
    db: Session = Depends(deps.get_db),
    teacher: Teacher = Depends(deps.require_teacher_profile),
):
    """Share a new resource (Teacher only)"""
    resource = LearningResource(teacher_id=teacher.id, **resource_in.model_dump())
    db.add(resource)
    db.commit()
    db.refresh(resource)

    return {
        "success": True,
        "message": "Resource uploaded successfully",
        "data": ResourceResponse.from_resource(resource),
    }


@router.put("/{resource_id}", response_model=APIResponse)
def update_resource(
    resource_id: uuid.UUID,
    update_data: ResourceUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.RoleChecker(["teacher"])),
):
    resource = get_owned_resource(db, resource_id, current_user)
    for key, value in update_data.model_dump(exclude_unset=True).items():
        if value is None and key in REQUIRED_FIELDS:
            continue
        setattr(resource, key, value)
    db.commit()
    db.refresh(resource)

    return {
        "success": True,
        "message": "Resource updated successfully",
        "data": ResourceResponse.from_resource(resource),
    }


@router.delete("/{resource_id}", response_model=APIResponse)
def delete_resource(
    resource_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.RoleChecker(["teacher"])),
):
    resource = get_owned_resource(db, resource_id, current_user)
    db.delete(resource)
    db.commit()
    return {"success": True, "message": "Resource deleted successfully", "data": None}


@router.post("/{resource_id}/download", response_model=APIResponse)
def download_resource(
    resource_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Hand out the resource link and count the download"""
    resource = _get_resource_or_404(db, resource_id)
    resource.download_count = LearningResource.download_count + 1
    db.commit()
    db.refresh(resource)

    return {
        "success": True,
        "message": "Download started",
        "data": {"url": resource.url, "download_count": resource.download_count},
    }


@router.post("/{resource_id}/bookmark", response_model=APIResponse)
def toggle_bookmark(
    resource_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    student: Student = Depends(deps.require_student_profile),
):
    """Bookmark a resource, or remove the bookmark if it is already there"""
    resource = _get_resource_or_404(db, resource_id)
    bookmark = (
        db.query(ResourceBookmark)
        .filter(
            ResourceBookmark.resource_id == resource.id,
            ResourceBookmark.student_id == student.id,
        )
        .first()
    )
    if bookmark:
        db.delete(bookmark)
    else:
        db.add(ResourceBookmark(resource_id=resource.id, student_id=student.id))
    db.commit()

    return {
        "success": True,
        "message": "Bookmark removed" if bookmark else "Bookmark added",
        "data": {"resource_id": resource.id, "is_bookmarked": bookmark is None},
    }
