import logging
from typing import Any, Callable, Dict, List

import pandas as pd
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy import func
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.core.errors import NotFoundError
from skills_hub.models import (
    Assignment,
    SchoolClass,
    Student,
    Submission,
    User,
    UserRole,
)
from skills_hub.schemas import APIResponse
from skills_hub.utils.dates import utcnow
from skills_hub.utils.stats import rounded_average

logger = logging.getLogger(__name__)

router = APIRouter()


def users_report(db: Session) -> List[Dict[str, Any]]:
    users = db.query(User).order_by(User.created_at.desc()).all()
    return [
        {
            "id": str(u.id),
            "name": u.name,
            "email": u.email,
            "role": u.role.value,
            "is_active": u.is_active,
            "created_at": u.created_at,
            "last_login": u.last_login,
        }
        for u in users
    ]


def assignments_report(db: Session) -> List[Dict[str, Any]]:
    counts = dict(
        db.query(Submission.assignment_id, func.count(Submission.id))
        .group_by(Submission.assignment_id)
        .all()
    )
    assignments = db.query(Assignment).order_by(Assignment.due_date.asc()).all()
    return [
        {
            "id": str(a.id),
            "title": a.title,
            "teacher_name": a.teacher.user.name if a.teacher and a.teacher.user else None,
            "due_date": a.due_date,
            "submission_count": counts.get(a.id, 0),
        }
        for a in assignments
    ]


def submissions_report(db: Session) -> List[Dict[str, Any]]:
    submissions = db.query(Submission).order_by(Submission.submitted_at.desc()).all()
    return [
        {
            "id": str(s.id),
            "assignment_title": s.assignment.title,
            "student_name": s.student.user.name,
            "student_email": s.student.user.email,
            "submitted_at": s.submitted_at,
            "grade": s.grade,
            "feedback": s.feedback,
        }
        for s in submissions
    ]


def classes_report(db: Session) -> List[Dict[str, Any]]:
    classes = db.query(SchoolClass).order_by(SchoolClass.start_time.asc()).all()
    return [
        {
            "id": str(c.id),
            "subject": c.subject,
            "teacher_name": c.teacher.user.name if c.teacher and c.teacher.user else None,
            "start_time": c.start_time,
            "end_time": c.end_time,
            "meeting_link": c.meeting_link,
        }
        for c in classes
    ]


def student_progress_report(db: Session) -> List[Dict[str, Any]]:
    total_assignments = db.query(func.count(Assignment.id)).scalar() or 0
    stats = {
        student_id: (submitted, graded, average)
        for student_id, submitted, graded, average in db.query(
            Submission.student_id,
            func.count(Submission.id),
            func.count(Submission.grade),
            func.avg(Submission.grade),
        )
        .group_by(Submission.student_id)
        .all()
    }

    rows = []
    students = db.query(Student).join(User).order_by(User.name.asc()).all()
    for student in students:
        submitted, graded, average = stats.get(student.id, (0, 0, None))
        rows.append(
            {
                "student_id": str(student.id),
                "name": student.user.name,
                "grade": student.grade,
                "total_assignments": total_assignments,
                "submitted": submitted,
                "graded": graded,
                "average_grade": rounded_average(average),
            }
        )
    return rows


REPORTS: Dict[str, Callable[[Session], List[Dict[str, Any]]]] = {
    "users": users_report,
    "assignments": assignments_report,
    "submissions": submissions_report,
    "classes": classes_report,
    "student-progress": student_progress_report,
}


@router.get("/stats", response_model=APIResponse)
def get_stats(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    """Headline counts for the admin reports page"""
    now = utcnow()

    users_by_role = {role.value: 0 for role in UserRole}
    for role, count in db.query(User.role, func.count(User.id)).group_by(User.role).all():
        users_by_role[role.value] = count

    total_assignments = db.query(func.count(Assignment.id)).scalar() or 0
    overdue = db.query(func.count(Assignment.id)).filter(Assignment.due_date < now).scalar() or 0

    total_submissions = db.query(func.count(Submission.id)).scalar() or 0
    graded = db.query(func.count(Submission.grade)).scalar() or 0
    average = db.query(func.avg(Submission.grade)).scalar()

    total_classes = db.query(func.count(SchoolClass.id)).scalar() or 0
    upcoming = (
        db.query(func.count(SchoolClass.id)).filter(SchoolClass.start_time > now).scalar() or 0
    )

    return {
        "success": True,
        "message": "Statistics retrieved successfully",
        "data": {
            "users": {"total": sum(users_by_role.values()), "by_role": users_by_role},
            "assignments": {
                "total": total_assignments,
                "overdue": overdue,
                "active": total_assignments - overdue,
            },
            "submissions": {
                "total": total_submissions,
                "graded": graded,
                "ungraded": total_submissions - graded,
                "average_grade": rounded_average(average),
            },
            "classes": {
                "total": total_classes,
                "upcoming": upcoming,
                "past": total_classes - upcoming,
            },
        },
    }


def _build_report(db: Session, name: str) -> List[Dict[str, Any]]:
    builder = REPORTS.get(name)
    if builder is None:
        raise NotFoundError("Report not found")
    return builder(db)


@router.get("/{name}", response_model=APIResponse)
def get_report(
    name: str,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    rows = _build_report(db, name)
    return {
        "success": True,
        "message": "Report generated successfully",
        "data": rows,
    }


@router.get("/{name}/export")
def export_report(
    name: str,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    """Download a report as CSV"""
    rows = _build_report(db, name)
    df = pd.DataFrame(rows)
    logger.info("Exporting %s report (%d rows)", name, len(df))

    return Response(
        content=df.to_csv(index=False),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={name}-report.csv"},
    )
