from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.models import (
    Admission,
    AdmissionStatus,
    Assignment,
    Message,
    MessageSender,
    Notification,
    Parent,
    SchoolClass,
    Student,
    Submission,
    Teacher,
    User,
    UserRole,
    WaitingListEntry,
    WaitingListStatus,
)
from skills_hub.schemas import APIResponse
from skills_hub.schemas.dashboard import (
    AdminDashboard,
    ChildSummary,
    DashboardResponse,
    ParentDashboard,
    StudentDashboard,
    TeacherDashboard,
)
from skills_hub.utils.dates import utcnow
from skills_hub.utils.stats import rounded_average

router = APIRouter()


def admin_summary(db: Session) -> AdminDashboard:
    users_by_role = {role.value: 0 for role in UserRole}
    for role, count in db.query(User.role, func.count(User.id)).group_by(User.role).all():
        users_by_role[role.value] = count

    return AdminDashboard(
        users_by_role=users_by_role,
        total_assignments=db.query(func.count(Assignment.id)).scalar() or 0,
        total_classes=db.query(func.count(SchoolClass.id)).scalar() or 0,
        ungraded_submissions=db.query(func.count(Submission.id))
        .filter(Submission.grade.is_(None))
        .scalar()
        or 0,
        pending_admissions=db.query(func.count(Admission.id))
        .filter(Admission.status == AdmissionStatus.pending)
        .scalar()
        or 0,
        waiting_list_size=db.query(func.count(WaitingListEntry.id))
        .filter(WaitingListEntry.status == WaitingListStatus.waiting)
        .scalar()
        or 0,
    )


def teacher_summary(db: Session, teacher: Teacher) -> TeacherDashboard:
    now = utcnow()
    return TeacherDashboard(
        my_assignments=db.query(func.count(Assignment.id))
        .filter(Assignment.teacher_id == teacher.id)
        .scalar()
        or 0,
        upcoming_classes=db.query(func.count(SchoolClass.id))
        .filter(SchoolClass.teacher_id == teacher.id, SchoolClass.start_time > now)
        .scalar()
        or 0,
        ungraded_submissions=db.query(func.count(Submission.id))
        .join(Assignment)
        .filter(Assignment.teacher_id == teacher.id, Submission.grade.is_(None))
        .scalar()
        or 0,
        unread_parent_messages=db.query(func.count(Message.id))
        .filter(
            Message.teacher_id == teacher.id,
            Message.sender == MessageSender.parent,
            Message.is_read == False,
        )
        .scalar()
        or 0,
    )


def student_summary(db: Session, student: Student) -> StudentDashboard:
    submitted_ids = select(Submission.assignment_id).where(
        Submission.student_id == student.id
    )
    pending = (
        db.query(func.count(Assignment.id))
        .filter(Assignment.id.notin_(submitted_ids))
        .scalar()
        or 0
    )
    graded, average = (
        db.query(func.count(Submission.grade), func.avg(Submission.grade))
        .filter(Submission.student_id == student.id)
        .one()
    )
    return StudentDashboard(
        pending_assignments=pending,
        graded_submissions=graded or 0,
        average_grade=rounded_average(average),
        upcoming_classes=db.query(func.count(SchoolClass.id))
        .filter(SchoolClass.start_time > utcnow())
        .scalar()
        or 0,
    )


def parent_summary(db: Session, parent: Parent) -> ParentDashboard:
    children = []
    for child in parent.children:
        submitted, average = (
            db.query(func.count(Submission.id), func.avg(Submission.grade))
            .filter(Submission.student_id == child.id)
            .one()
        )
        children.append(
            ChildSummary(
                student_id=child.id,
                name=child.user.name,
                grade=child.grade,
                submitted_assignments=submitted or 0,
                average_grade=rounded_average(average),
            )
        )

    unread = (
        db.query(func.count(Message.id))
        .filter(
            Message.parent_id == parent.id,
            Message.sender == MessageSender.teacher,
            Message.is_read == False,
        )
        .scalar()
        or 0
    )
    return ParentDashboard(children=children, unread_teacher_messages=unread)


@router.get("", response_model=APIResponse)
def get_dashboard(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Summary cards for the caller's role"""
    summary = None
    if current_user.role == UserRole.admin:
        summary = admin_summary(db)
    elif current_user.role == UserRole.teacher and current_user.teacher:
        summary = teacher_summary(db, current_user.teacher)
    elif current_user.role == UserRole.student and current_user.student:
        summary = student_summary(db, current_user.student)
    elif current_user.role == UserRole.parent and current_user.parent:
        summary = parent_summary(db, current_user.parent)

    unread_notifications = (
        db.query(func.count(Notification.id))
        .filter(Notification.user_id == current_user.id, Notification.is_read == False)
        .scalar()
        or 0
    )

    return {
        "success": True,
        "message": "Dashboard retrieved successfully",
        "data": DashboardResponse(
            role=current_user.role.value,
            unread_notifications=unread_notifications,
            summary=summary,
        ),
    }
