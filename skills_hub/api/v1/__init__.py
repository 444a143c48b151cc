from skills_hub.api.v1.auth import router as auth_router
from skills_hub.api.v1.users import router as users_router
from skills_hub.api.v1.assignments import router as assignments_router
from skills_hub.api.v1.classes import router as classes_router
from skills_hub.api.v1.submissions import router as submissions_router
from skills_hub.api.v1.reports import router as reports_router
from skills_hub.api.v1.dashboard import router as dashboard_router
from skills_hub.api.v1.admissions import router as admissions_router
from skills_hub.api.v1.waiting_list import router as waiting_list_router
from skills_hub.api.v1.payslips import router as payslips_router
from skills_hub.api.v1.messages import router as messages_router
from skills_hub.api.v1.notifications import router as notifications_router
from skills_hub.api.v1.branches import router as branches_router
from skills_hub.api.v1.resources import router as resources_router

__all__ = [
    "auth_router",
    "users_router",
    "assignments_router",
    "classes_router",
    "submissions_router",
    "reports_router",
    "dashboard_router",
    "admissions_router",
    "waiting_list_router",
    "payslips_router",
    "messages_router",
    "notifications_router",
    "branches_router",
    "resources_router",
]
