from sqlalchemy.orm import sessionmaker

from skills_hub.core import security
from skills_hub.models import Branch, DEFAULT_BRANCH_NAME, User, UserRole
from skills_hub.services.setup import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    create_default_admin,
    seed_database,
    setup_database,
)


def test_seeding_twice_keeps_a_single_admin(db):
    seed_database(db)
    seed_database(db)
    assert db.query(User).filter(User.email == ADMIN_EMAIL).count() == 1
    assert db.query(User).filter(User.role == UserRole.admin).count() == 1


def test_create_default_admin_skips_existing(db):
    assert create_default_admin(db) is False


def test_admin_password_is_hashed(db):
    admin = db.query(User).filter(User.email == ADMIN_EMAIL).one()
    assert admin.password_hash != ADMIN_PASSWORD
    assert security.verify_password(ADMIN_PASSWORD, admin.password_hash)


def test_sample_accounts_have_profiles(db):
    teacher = db.query(User).filter(User.email == "teacher@school.com").one()
    student = db.query(User).filter(User.email == "student@school.com").one()
    parent = db.query(User).filter(User.email == "parent@school.com").one()

    assert teacher.teacher.subject == "Mathematics"
    assert student.student.grade == "10th Grade"
    assert student.student.parent_id == parent.parent.id
    assert [child.user.name for child in parent.parent.children] == ["Jane Smith"]


def test_setup_database_creates_schema_and_seeds(engine):
    session = sessionmaker(bind=engine)()
    try:
        setup_database(engine=engine, db=session, with_samples=False)
        assert session.query(User).count() == 1
    finally:
        session.close()


def test_main_campus_is_seeded_once(db):
    seed_database(db)
    branches = db.query(Branch).filter(Branch.name == DEFAULT_BRANCH_NAME).all()
    assert len(branches) == 1
    assert branches[0].manager_email == "branch@school.com"
