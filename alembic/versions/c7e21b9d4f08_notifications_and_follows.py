"""notifications and follows

Revision ID: c7e21b9d4f08
Revises: a1c3e5f70b21
Create Date: 2026-10-19 09:41:27.503116

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'c7e21b9d4f08'
down_revision = 'a1c3e5f70b21'
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('link', sa.String(length=512), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_notifications'),
        sa.ForeignKeyConstraint(['user_id'], ['user_profiles.user_id'], ondelete='CASCADE',
                                name='fk_notifications_user_id_user_profiles'),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])

    op.create_table(
        'follows',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('target_type', sa.String(length=16), nullable=False),
        sa.Column('target_value', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_follows'),
        sa.ForeignKeyConstraint(['user_id'], ['user_profiles.user_id'], ondelete='CASCADE',
                                name='fk_follows_user_id_user_profiles'),
        sa.UniqueConstraint('user_id', 'target_type', 'target_value', name='uq_follow_target'),
    )
    op.create_index('ix_follows_user_id', 'follows', ['user_id'])
    op.create_index('ix_follows_target', 'follows', ['target_type', 'target_value'])


def downgrade() -> None:
    op.drop_index('ix_follows_target', table_name='follows')
    op.drop_table('follows')
    op.drop_table('notifications')
