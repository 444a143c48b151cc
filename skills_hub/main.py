import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skills_hub.core.config import settings
from skills_hub.core.errors import register_error_handlers
from skills_hub.api.v1 import (
    auth_router,
    users_router,
    assignments_router,
    classes_router,
    submissions_router,
    reports_router,
    dashboard_router,
    admissions_router,
    waiting_list_router,
    payslips_router,
    messages_router,
    notifications_router,
    branches_router,
    resources_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.PROJECT_NAME, openapi_url=f"{settings.API_PREFIX}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)

register_error_handlers(app)

# Include Routers
app.include_router(auth_router, prefix=f"{settings.API_PREFIX}/auth", tags=["Auth"])
app.include_router(users_router, prefix=f"{settings.API_PREFIX}/users", tags=["Users"])
app.include_router(
    assignments_router, prefix=f"{settings.API_PREFIX}/assignments", tags=["Assignments"]
)
app.include_router(classes_router, prefix=f"{settings.API_PREFIX}/classes", tags=["Classes"])
app.include_router(
    submissions_router, prefix=f"{settings.API_PREFIX}/submissions", tags=["Submissions"]
)
app.include_router(reports_router, prefix=f"{settings.API_PREFIX}/reports", tags=["Reports"])
app.include_router(
    dashboard_router, prefix=f"{settings.API_PREFIX}/dashboard", tags=["Dashboard"]
)
app.include_router(
    admissions_router, prefix=f"{settings.API_PREFIX}/admissions", tags=["Admissions"]
)
app.include_router(
    waiting_list_router, prefix=f"{settings.API_PREFIX}/waiting-list", tags=["Waiting List"]
)
app.include_router(payslips_router, prefix=f"{settings.API_PREFIX}/payslips", tags=["Payslips"])
app.include_router(messages_router, prefix=f"{settings.API_PREFIX}/messages", tags=["Messages"])
app.include_router(
    notifications_router,
    prefix=f"{settings.API_PREFIX}/notifications",
    tags=["Notifications"],
)
app.include_router(branches_router, prefix=f"{settings.API_PREFIX}/branches", tags=["Branches"])
app.include_router(
    resources_router, prefix=f"{settings.API_PREFIX}/resources", tags=["Resources"]
)


@app.get("/")
async def root():
    return {"message": "Welcome to Knowledge and Skills Hub API"}


@app.get("/health")
async def health():
    return {"status": "ok"}
