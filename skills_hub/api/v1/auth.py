import logging
from datetime import timedelta
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from skills_hub.api import deps
from skills_hub.core import security
from skills_hub.core.config import settings
from skills_hub.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from skills_hub.models import Parent, Student, Teacher, User, UserRole
from skills_hub.schemas import (
    APIResponse,
    ChangePasswordRequest,
    Login,
    RegisterRequest,
    UserResponse,
)
from skills_hub.services.setup import DEMO_ACCOUNTS
from skills_hub.utils.dates import as_utc, utcnow

logger = logging.getLogger(__name__)

router = APIRouter()


def _demo_user(db: Session, login: str, password: str) -> Optional[User]:
    """Resolve the demo shortcut ``<role>/<role>`` to its seeded account."""
    if not settings.DEMO_LOGIN_ENABLED:
        return None
    email = DEMO_ACCOUNTS.get(login)
    if not email or password != login:
        return None
    return db.query(User).filter(User.email == email).first()


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    user = _demo_user(db, email, password)
    if user:
        logger.info("Demo login for %s", user.email)
        return user

    user = db.query(User).filter(User.email == email).first()
    if not user:
        return None

    # Check Lockout
    locked_until = as_utc(user.locked_until)
    if locked_until and locked_until > utcnow():
        raise ForbiddenError(
            f"Account locked. Try again after {locked_until.strftime('%H:%M:%S')} UTC"
        )

    if not security.verify_password(password, user.password_hash):
        user.failed_login_attempts = (user.failed_login_attempts or 0) + 1
        if user.failed_login_attempts >= settings.MAX_FAILED_LOGINS:
            user.locked_until = utcnow() + timedelta(minutes=settings.LOCKOUT_MINUTES)
            db.commit()
            logger.warning("Locked account %s after repeated failures", user.email)
            raise ForbiddenError(
                "Account locked due to multiple failed attempts. "
                f"Try again in {settings.LOCKOUT_MINUTES} minutes."
            )
        db.commit()
        return None

    return user


@router.post("/login", response_model=APIResponse)
def login(credentials: Login, db: Session = Depends(deps.get_db)):
    """Exchange credentials for a bearer token"""
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise UnauthorizedError("Invalid credentials")
    if not user.is_active:
        raise ForbiddenError("Account is inactive")

    # Success: Reset attempts
    user.failed_login_attempts = 0
    user.locked_until = None
    user.last_login = utcnow()
    db.commit()
    db.refresh(user)

    token = security.create_access_token(user.id, role=user.role.value)
    return {
        "success": True,
        "message": "Login successful",
        "data": {
            "token": token,
            "token_type": "bearer",
            "user": UserResponse.from_user(user),
        },
    }


@router.post("/register", response_model=APIResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_in: RegisterRequest,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.require_admin),
):
    """Create a teacher, student or parent account (Admin only)"""
    if db.query(User).filter(User.email == user_in.email).first():
        raise ConflictError("User already exists")

    if user_in.parent_id and not db.query(Parent).filter(Parent.id == user_in.parent_id).first():
        raise NotFoundError("Parent not found")

    user = User(
        name=user_in.name,
        email=user_in.email,
        password_hash=security.get_password_hash(user_in.password),
        role=UserRole(user_in.role),
    )
    db.add(user)
    db.flush()

    # Role row goes in the same transaction as the account
    if user.role == UserRole.teacher:
        db.add(Teacher(user_id=user.id, subject=user_in.subject))
    elif user.role == UserRole.student:
        db.add(Student(user_id=user.id, grade=user_in.grade, parent_id=user_in.parent_id))
    elif user.role == UserRole.parent:
        db.add(Parent(user_id=user.id, phone=user_in.phone, address=user_in.address))

    db.commit()
    db.refresh(user)
    logger.info("User %s registered as %s by %s", user.email, user.role.value, current_user.email)

    return {
        "success": True,
        "message": "User created successfully",
        "data": UserResponse.from_user(user),
    }


@router.get("/profile", response_model=APIResponse)
def get_profile(current_user: User = Depends(deps.get_current_user)):
    return {
        "success": True,
        "message": "Profile retrieved successfully",
        "data": UserResponse.from_user(current_user),
    }


@router.put("/change-password", response_model=APIResponse)
def change_password(
    data: ChangePasswordRequest,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
):
    if not security.verify_password(data.current_password, current_user.password_hash):
        raise UnauthorizedError("Current password is incorrect")

    current_user.password_hash = security.get_password_hash(data.new_password)
    db.commit()

    return {"success": True, "message": "Password changed successfully", "data": None}
