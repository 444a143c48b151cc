"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum(
    'admin', 'teacher', 'student', 'parent', 'hr_manager', 'branch_manager', name='userrole'
)
payslip_status = sa.Enum('paid', 'pending', 'processing', name='payslipstatus')
message_sender = sa.Enum('teacher', 'parent', name='messagesender')
notification_type = sa.Enum(
    'assignment', 'class', 'user', 'system', 'reminder', name='notificationtype'
)
notification_priority = sa.Enum('low', 'medium', 'high', name='notificationpriority')
admission_status = sa.Enum('pending', 'approved', 'rejected', name='admissionstatus')
waiting_list_status = sa.Enum(
    'waiting', 'contacted', 'enrolled', 'rejected', name='waitingliststatus'
)


def _uuid():
    return postgresql.UUID(as_uuid=True)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('failed_login_attempts', sa.Integer(), nullable=True),
        sa.Column('locked_until', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'teachers',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('user_id', _uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('subject', sa.String(), nullable=True),
    )
    op.create_table(
        'parents',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('user_id', _uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
    )
    op.create_table(
        'students',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('user_id', _uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('grade', sa.String(), nullable=True),
        sa.Column('parent_id', _uuid(), sa.ForeignKey('parents.id', ondelete='SET NULL'), nullable=True),
    )

    op.create_table(
        'assignments',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('teacher_id', _uuid(), sa.ForeignKey('teachers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('attachment_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        'classes',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('teacher_id', _uuid(), sa.ForeignKey('teachers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('subject', sa.String(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('meeting_link', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )
    op.create_table(
        'submissions',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('assignment_id', _uuid(), sa.ForeignKey('assignments.id', ondelete='CASCADE'), nullable=False),
        sa.Column('student_id', _uuid(), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column('file_url', sa.String(), nullable=False),
        sa.Column('submitted_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('grade', sa.Float(), nullable=True),
        sa.Column('feedback', sa.Text(), nullable=True),
        sa.UniqueConstraint('assignment_id', 'student_id', name='uq_submission_student'),
    )

    op.create_table(
        'payslips',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('teacher_id', _uuid(), sa.ForeignKey('teachers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('month', sa.String(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('base_salary', sa.Numeric(10, 2), nullable=False),
        sa.Column('allowances', sa.Numeric(10, 2), nullable=True),
        sa.Column('overtime', sa.Numeric(10, 2), nullable=True),
        sa.Column('deductions', sa.Numeric(10, 2), nullable=True),
        sa.Column('tax', sa.Numeric(10, 2), nullable=True),
        sa.Column('net_pay', sa.Numeric(10, 2), nullable=False),
        sa.Column('pay_date', sa.Date(), nullable=True),
        sa.Column('status', payslip_status, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.UniqueConstraint('teacher_id', 'month', 'year', name='uq_payslip_period'),
    )

    op.create_table(
        'messages',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('parent_id', _uuid(), sa.ForeignKey('parents.id', ondelete='CASCADE'), nullable=False),
        sa.Column('teacher_id', _uuid(), sa.ForeignKey('teachers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('sender', message_sender, nullable=False),
        sa.Column('subject', sa.String(), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=True),
        sa.Column('sent_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )
    op.create_table(
        'notifications',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('user_id', _uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', notification_type, nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('priority', notification_priority, nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )

    op.create_table(
        'admissions',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('status', admission_status, nullable=True),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('age', sa.String(), nullable=True),
        sa.Column('date_of_birth', sa.String(), nullable=False),
        sa.Column('gender', sa.String(), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('contact_number', sa.String(), nullable=False),
        sa.Column('emergency_contact_number', sa.String(), nullable=True),
        sa.Column('school_year', sa.String(), nullable=True),
        sa.Column('school_name', sa.String(), nullable=True),
        sa.Column('subjects', sa.JSON(), nullable=False),
        sa.Column('current_grade', sa.String(), nullable=True),
        sa.Column('parent_name', sa.String(), nullable=False),
        sa.Column('parent_contact', sa.String(), nullable=True),
        sa.Column('parent_email', sa.String(), nullable=False),
        sa.Column('submitted_by_id', _uuid(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('submitted_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )
    op.create_table(
        'waiting_list',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('admission_id', _uuid(), sa.ForeignKey('admissions.id', ondelete='SET NULL'), nullable=True),
        sa.Column('student_name', sa.String(), nullable=False),
        sa.Column('parent_name', sa.String(), nullable=False),
        sa.Column('parent_email', sa.String(), nullable=False),
        sa.Column('parent_phone', sa.String(), nullable=True),
        sa.Column('desired_grade', sa.String(), nullable=False),
        sa.Column('desired_subjects', sa.String(), nullable=True),
        sa.Column('branch_name', sa.String(), nullable=True),
        sa.Column('application_date', sa.Date(), server_default=sa.func.current_date(), nullable=True),
        sa.Column('status', waiting_list_status, nullable=True),
        sa.Column('priority', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('waiting_list')
    op.drop_table('admissions')
    op.drop_table('notifications')
    op.drop_table('messages')
    op.drop_table('payslips')
    op.drop_table('submissions')
    op.drop_table('classes')
    op.drop_table('assignments')
    op.drop_table('students')
    op.drop_table('parents')
    op.drop_table('teachers')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (
        waiting_list_status,
        admission_status,
        notification_priority,
        notification_type,
        message_sender,
        payslip_status,
        user_role,
    ):
        enum_type.drop(bind, checkfirst=True)
