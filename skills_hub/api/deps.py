import uuid
from typing import List, Optional
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import ExpiredSignatureError, JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from skills_hub.core import security
from skills_hub.core.config import settings
from skills_hub.core.database import get_db
from skills_hub.core.errors import ForbiddenError, UnauthorizedError
from skills_hub.models import Parent, Student, Teacher, User
from skills_hub.schemas.auth import TokenPayload

# OAuth2PasswordBearer allows for token extraction from header
reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login",
    auto_error=False,  # Missing tokens are reported through the error envelope
)


def get_current_user(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(reusable_oauth2),
) -> User:
    if not token:
        raise UnauthorizedError("Access token required")

    try:
        payload = security.decode_access_token(token)
        token_data = TokenPayload(**payload)
        user_id = uuid.UUID(token_data.sub)
    except ExpiredSignatureError:
        raise UnauthorizedError("Token expired")
    except (JWTError, ValidationError, TypeError, ValueError):
        raise ForbiddenError("Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise UnauthorizedError("Invalid token")
    if not user.is_active:
        raise ForbiddenError("Account is inactive")
    return user


class RoleChecker:
    """Allow the listed roles; admin is always allowed."""

    def __init__(self, allowed_roles: List[str]):
        self.allowed_roles = allowed_roles

    def __call__(self, current_user: User = Depends(get_current_user)) -> User:
        role = current_user.role.value if hasattr(current_user.role, "value") else current_user.role
        if role not in self.allowed_roles and role != "admin":
            raise ForbiddenError("Insufficient permissions")
        return current_user


require_admin = RoleChecker([])


def require_teacher_profile(
    current_user: User = Depends(RoleChecker(["teacher"])),
) -> Teacher:
    if not current_user.teacher:
        raise ForbiddenError("Teacher access required")
    return current_user.teacher


def require_student_profile(
    current_user: User = Depends(RoleChecker(["student"])),
) -> Student:
    if not current_user.student:
        raise ForbiddenError("Student access required")
    return current_user.student


def require_parent_profile(
    current_user: User = Depends(RoleChecker(["parent"])),
) -> Parent:
    if not current_user.parent:
        raise ForbiddenError("Parent access required")
    return current_user.parent


def is_admin(user: User) -> bool:
    return user.role == "admin"
