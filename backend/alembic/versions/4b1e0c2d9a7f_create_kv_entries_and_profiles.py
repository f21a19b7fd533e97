"""create kv_entries + profiles

Revision ID: 4b1e0c2d9a7f
Revises:
Create Date: 2026-10-18 10:12:41.530114

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

user_role = sa.Enum('client', 'trainer', 'nutritionist', 'admin', 'hr', name='user_role')


# revision identifiers, used by Alembic.
revision: str = '4b1e0c2d9a7f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) key-value medium backing the local entity store
    op.create_table(
        'kv_entries',
        sa.Column('key', sa.String(length=255), primary_key=True),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )

    # 2) profiles for the auth provider
    op.create_table(
        'profiles',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=120), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('role', user_role, nullable=False, server_default='client'),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_index('ix_profiles_email', 'profiles', ['email'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_profiles_email', table_name='profiles')
    op.drop_table('profiles')
    op.drop_table('kv_entries')
    user_role.drop(op.get_bind(), checkfirst=True)
