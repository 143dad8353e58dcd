"""Create users and students tables

Revision ID: 20260110_000001
Revises: None
Create Date: 2026-01-10

Login accounts (staff and students) and the student roster payments attach to.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20260110_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the users and students tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('pin_hash', sa.String(255), nullable=False),
        sa.Column(
            'role',
            sa.Enum('ADMIN', 'STUDENT', name='user_role', create_constraint=True),
            nullable=False,
            server_default='STUDENT'
        ),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_phone', 'users', ['phone'], unique=True)

    op.create_table(
        'students',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('full_name', sa.String(200), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('guardian_phone', sa.String(20), nullable=True),
        sa.Column('monthly_fee', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['user_id'],
            ['users.id'],
            name='fk_students_user_id',
            ondelete='SET NULL'
        ),
        sa.UniqueConstraint('user_id', name='uq_students_user_id'),
    )


def downgrade() -> None:
    """Drop the students and users tables."""
    op.drop_table('students')
    op.drop_index('ix_users_phone', table_name='users')
    op.drop_table('users')

    # Drop the enum type
    op.execute("DROP TYPE IF EXISTS user_role")
