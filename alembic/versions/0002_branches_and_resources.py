"""branches and learning resources

Revision ID: 0002_branches_and_resources
Revises: 0001_initial_schema
Create Date: 2026-10-19 15:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0002_branches_and_resources'
down_revision: Union[str, Sequence[str], None] = '0001_initial_schema'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

branch_status = sa.Enum('active', 'inactive', 'maintenance', name='branchstatus')
resource_type = sa.Enum(
    'pdf', 'document', 'image', 'video', 'link', 'slides', 'other', name='resourcetype'
)
resource_category = sa.Enum(
    'lesson_notes', 'past_papers', 'worksheets', 'videos', 'reference', 'extra_reading',
    name='resourcecategory',
)


def _uuid():
    return postgresql.UUID(as_uuid=True)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'branches',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False, unique=True),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('manager_name', sa.String(), nullable=False),
        sa.Column('manager_email', sa.String(), nullable=False),
        sa.Column('status', branch_status, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )

    # SQLite cannot add a foreign key in place; batch mode rebuilds the table there
    with op.batch_alter_table('waiting_list') as batch_op:
        batch_op.add_column(sa.Column('branch_id', _uuid(), nullable=True))
        batch_op.create_foreign_key(
            'fk_waiting_list_branch_id', 'branches', ['branch_id'], ['id'], ondelete='SET NULL'
        )

    op.create_table(
        'learning_resources',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('teacher_id', _uuid(), sa.ForeignKey('teachers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('subject', sa.String(), nullable=False),
        sa.Column('type', resource_type, nullable=True),
        sa.Column('category', resource_category, nullable=True),
        sa.Column('url', sa.String(), nullable=True),
        sa.Column('file_size', sa.String(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('download_count', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )
    op.create_table(
        'resource_bookmarks',
        sa.Column('id', _uuid(), primary_key=True),
        sa.Column('resource_id', _uuid(), sa.ForeignKey('learning_resources.id', ondelete='CASCADE'), nullable=False),
        sa.Column('student_id', _uuid(), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.UniqueConstraint('resource_id', 'student_id', name='uq_resource_bookmark'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('resource_bookmarks')
    op.drop_table('learning_resources')

    # Dropping the column takes its foreign key with it
    with op.batch_alter_table('waiting_list') as batch_op:
        batch_op.drop_column('branch_id')

    op.drop_table('branches')

    bind = op.get_bind()
    for enum_type in (resource_category, resource_type, branch_status):
        enum_type.drop(bind, checkfirst=True)
