from pydantic import BaseModel
from typing import Dict, List, Optional, Union
from uuid import UUID


class AdminDashboard(BaseModel):
    users_by_role: Dict[str, int]
    total_assignments: int
    total_classes: int
    ungraded_submissions: int
    pending_admissions: int
    waiting_list_size: int


class TeacherDashboard(BaseModel):
    my_assignments: int
    upcoming_classes: int
    ungraded_submissions: int
    unread_parent_messages: int


class StudentDashboard(BaseModel):
    pending_assignments: int
    graded_submissions: int
    average_grade: Optional[float] = None
    upcoming_classes: int


class ChildSummary(BaseModel):
    student_id: UUID
    name: str
    grade: Optional[str] = None
    submitted_assignments: int
    average_grade: Optional[float] = None


class ParentDashboard(BaseModel):
    children: List[ChildSummary]
    unread_teacher_messages: int


class DashboardResponse(BaseModel):
    role: str
    unread_notifications: int
    summary: Optional[
        Union[AdminDashboard, TeacherDashboard, StudentDashboard, ParentDashboard]
    ] = None
