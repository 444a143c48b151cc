"""Schema creation and seed data.

Run with ``skills-hub-setup`` (or ``python -m skills_hub.services.setup``).
Setup is idempotent: the default admin and the sample accounts are only
inserted when their email is not taken yet.
"""
import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from skills_hub.core import security
from skills_hub.core.config import settings
from skills_hub.core.database import Base, SessionLocal, engine as default_engine
from skills_hub.models import (
    Branch,
    DEFAULT_BRANCH_NAME,
    Parent,
    Student,
    Teacher,
    User,
    UserRole,
)

logger = logging.getLogger(__name__)

ADMIN_NAME = "System Admin"
ADMIN_EMAIL = "admin@school.com"
ADMIN_PASSWORD = "admin123"

# Shortcut login name -> seeded account it signs in as
DEMO_ACCOUNTS = {
    "admin": ADMIN_EMAIL,
    "teacher": "teacher@school.com",
    "student": "student@school.com",
    "parent": "parent@school.com",
    "hr": "hr@school.com",
    "branch": "branch@school.com",
}


def _get_or_create_user(
    db: Session, name: str, email: str, password: str, role: UserRole
) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user:
        return user
    user = User(
        name=name,
        email=email,
        password_hash=security.get_password_hash(password),
        role=role,
    )
    db.add(user)
    db.flush()
    return user


def create_default_admin(db: Session) -> bool:
    """Insert the admin account unless its email already exists."""
    if db.query(User).filter(User.email == ADMIN_EMAIL).first():
        logger.info("Default admin already present, skipping")
        return False

    db.add(
        User(
            name=ADMIN_NAME,
            email=ADMIN_EMAIL,
            password_hash=security.get_password_hash(ADMIN_PASSWORD),
            role=UserRole.admin,
        )
    )
    db.commit()
    logger.info("Default admin user created (email: %s)", ADMIN_EMAIL)
    return True


def create_sample_data(db: Session) -> bool:
    """Sample teacher, parent, student and staff accounts plus the main branch.

    Failures are logged and rolled back; they never abort setup.
    """
    try:
        teacher_user = _get_or_create_user(
            db, "John Doe", "teacher@school.com", "teacher123", UserRole.teacher
        )
        if not teacher_user.teacher:
            db.add(Teacher(user_id=teacher_user.id, subject="Mathematics"))

        parent_user = _get_or_create_user(
            db, "Mary Smith", "parent@school.com", "parent123", UserRole.parent
        )
        parent = parent_user.parent
        if not parent:
            parent = Parent(
                user_id=parent_user.id, phone="+1234567890", address="123 Main St, City"
            )
            db.add(parent)
            db.flush()

        student_user = _get_or_create_user(
            db, "Jane Smith", "student@school.com", "student123", UserRole.student
        )
        if not student_user.student:
            db.add(Student(user_id=student_user.id, grade="10th Grade", parent_id=parent.id))

        _get_or_create_user(db, "HR Manager", "hr@school.com", "hr123", UserRole.hr_manager)
        manager = _get_or_create_user(
            db, "Branch Manager", "branch@school.com", "branch123", UserRole.branch_manager
        )
        if not db.query(Branch).filter(Branch.name == DEFAULT_BRANCH_NAME).first():
            db.add(
                Branch(
                    name=DEFAULT_BRANCH_NAME,
                    address="123 Main St, City",
                    phone="+1234567890",
                    email="main@school.com",
                    manager_name=manager.name,
                    manager_email=manager.email,
                )
            )

        db.commit()
        logger.info("Sample data created successfully")
        return True
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Sample data creation failed", exc_info=True)
        return False


def seed_database(db: Session, with_samples: bool = True) -> None:
    create_default_admin(db)
    if with_samples:
        create_sample_data(db)


def setup_database(
    engine: Optional[Engine] = None, db: Optional[Session] = None, with_samples: bool = True
) -> None:
    engine = engine or default_engine
    logger.info("Setting up Knowledge and Skills Hub database...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema created successfully")

    session = db or SessionLocal()
    try:
        seed_database(session, with_samples=with_samples)
    finally:
        if db is None:
            session.close()
    logger.info("Database setup completed successfully")


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    setup_database()


if __name__ == "__main__":
    main()
