"""create profiles, badges, shop, documents and forum tables

Revision ID: a1c3e5f70b21
Revises:
Create Date: 2026-09-14 10:12:40.118204

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'a1c3e5f70b21'
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum('student', 'lecturer', 'alumni', 'moderator', 'admin', name='user_role')
document_status = sa.Enum('pending', 'approved', 'rejected', name='document_status')

def upgrade() -> None:
    op.create_table(
        'user_profiles',
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('display_name', sa.String(length=255), nullable=True),
        sa.Column('faculty', sa.String(length=255), nullable=True),
        sa.Column('role', user_role, nullable=False, server_default='student'),
        sa.Column('points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('student_id', sa.String(length=32), nullable=True),
        sa.Column('verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('joined_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('user_id', name='pk_user_profiles'),
        sa.CheckConstraint('points >= 0', name='ck_user_profiles_points_non_negative'),
    )

    op.create_table(
        'badges',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('icon', sa.String(length=64), nullable=False),
        sa.Column('color', sa.String(length=16), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('requirement', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id', name='pk_badges'),
        sa.UniqueConstraint('name', name='uq_badges_name'),
        sa.CheckConstraint('requirement >= 0', name='ck_badges_requirement_non_negative'),
    )
    op.create_index('ix_badges_id', 'badges', ['id'])
    op.create_index('ix_badges_type', 'badges', ['type'])

    op.create_table(
        'user_badges',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('badge_id', sa.Integer(), nullable=False),
        sa.Column('earned_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_user_badges'),
        sa.ForeignKeyConstraint(['user_id'], ['user_profiles.user_id'], ondelete='CASCADE',
                                name='fk_user_badges_user_id_user_profiles'),
        sa.ForeignKeyConstraint(['badge_id'], ['badges.id'], ondelete='CASCADE',
                                name='fk_user_badges_badge_id_badges'),
        sa.UniqueConstraint('user_id', 'badge_id', name='uq_user_badge'),
    )
    op.create_index('ix_user_badges_user_id', 'user_badges', ['user_id'])
    op.create_index('ix_user_badges_badge_id', 'user_badges', ['badge_id'])

    op.create_table(
        'shop_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=160), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('cost', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('icon', sa.String(length=64), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id', name='pk_shop_items'),
        sa.UniqueConstraint('name', name='uq_shop_items_name'),
        sa.CheckConstraint('cost > 0', name='ck_shop_items_cost_positive'),
    )
    op.create_index('ix_shop_items_id', 'shop_items', ['id'])

    op.create_table(
        'shop_purchases',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('points_spent', sa.Integer(), nullable=False),
        sa.Column('purchased_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_shop_purchases'),
        sa.ForeignKeyConstraint(['user_id'], ['user_profiles.user_id'], ondelete='CASCADE',
                                name='fk_shop_purchases_user_id_user_profiles'),
        sa.ForeignKeyConstraint(['item_id'], ['shop_items.id'], name='fk_shop_purchases_item_id_shop_items'),
    )
    op.create_index('ix_shop_purchases_user_id', 'shop_purchases', ['user_id'])
    op.create_index('ix_shop_purchases_item_id', 'shop_purchases', ['item_id'])

    op.create_table(
        'documents',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('faculty', sa.String(length=255), nullable=False),
        sa.Column('subject', sa.String(length=255), nullable=True),
        sa.Column('category', sa.String(length=120), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('file_url', sa.String(length=512), nullable=True),
        sa.Column('file_name', sa.String(length=255), nullable=True),
        sa.Column('file_size', sa.Integer(), nullable=True),
        sa.Column('file_type', sa.String(length=120), nullable=True),
        sa.Column('uploader_id', sa.String(length=64), nullable=False),
        sa.Column('status', document_status, nullable=False, server_default='pending'),
        sa.Column('download_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('view_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('average_rating', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('rating_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('year', sa.String(length=16), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_documents'),
        sa.ForeignKeyConstraint(['uploader_id'], ['user_profiles.user_id'],
                                name='fk_documents_uploader_id_user_profiles'),
    )
    op.create_index('ix_documents_id', 'documents', ['id'])
    op.create_index('ix_documents_faculty', 'documents', ['faculty'])
    op.create_index('ix_documents_category', 'documents', ['category'])
    op.create_index('ix_documents_uploader_id', 'documents', ['uploader_id'])
    op.create_index('ix_documents_status', 'documents', ['status'])

    op.create_table(
        'ratings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('document_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_ratings'),
        sa.ForeignKeyConstraint(['document_id'], ['documents.id'], ondelete='CASCADE',
                                name='fk_ratings_document_id_documents'),
        sa.ForeignKeyConstraint(['user_id'], ['user_profiles.user_id'], ondelete='CASCADE',
                                name='fk_ratings_user_id_user_profiles'),
        sa.UniqueConstraint('document_id', 'user_id', name='uq_rating_document_user'),
        sa.CheckConstraint('score BETWEEN 1 AND 5', name='ck_ratings_score_range'),
    )
    op.create_index('ix_ratings_document_id', 'ratings', ['document_id'])
    op.create_index('ix_ratings_user_id', 'ratings', ['user_id'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('document_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_comments'),
        sa.ForeignKeyConstraint(['document_id'], ['documents.id'], ondelete='CASCADE',
                                name='fk_comments_document_id_documents'),
        sa.ForeignKeyConstraint(['user_id'], ['user_profiles.user_id'], ondelete='CASCADE',
                                name='fk_comments_user_id_user_profiles'),
    )
    op.create_index('ix_comments_document_id', 'comments', ['document_id'])
    op.create_index('ix_comments_user_id', 'comments', ['user_id'])

    op.create_table(
        'downloads',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('document_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('downloaded_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_downloads'),
        sa.ForeignKeyConstraint(['document_id'], ['documents.id'], ondelete='CASCADE',
                                name='fk_downloads_document_id_documents'),
        sa.ForeignKeyConstraint(['user_id'], ['user_profiles.user_id'], ondelete='CASCADE',
                                name='fk_downloads_user_id_user_profiles'),
    )
    op.create_index('ix_downloads_document_id', 'downloads', ['document_id'])
    op.create_index('ix_downloads_user_id', 'downloads', ['user_id'])

    op.create_table(
        'forum_threads',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('course_code', sa.String(length=16), nullable=True),
        sa.Column('faculty', sa.String(length=255), nullable=True),
        sa.Column('author_id', sa.String(length=64), nullable=False),
        sa.Column('view_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('reply_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_pinned', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_locked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_forum_threads'),
        sa.ForeignKeyConstraint(['author_id'], ['user_profiles.user_id'],
                                name='fk_forum_threads_author_id_user_profiles'),
    )
    op.create_index('ix_forum_threads_id', 'forum_threads', ['id'])
    op.create_index('ix_forum_threads_course_code', 'forum_threads', ['course_code'])
    op.create_index('ix_forum_threads_faculty', 'forum_threads', ['faculty'])
    op.create_index('ix_forum_threads_author_id', 'forum_threads', ['author_id'])

    op.create_table(
        'forum_replies',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('thread_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_best_answer', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_forum_replies'),
        sa.ForeignKeyConstraint(['thread_id'], ['forum_threads.id'], ondelete='CASCADE',
                                name='fk_forum_replies_thread_id_forum_threads'),
        sa.ForeignKeyConstraint(['user_id'], ['user_profiles.user_id'], ondelete='CASCADE',
                                name='fk_forum_replies_user_id_user_profiles'),
    )
    op.create_index('ix_forum_replies_thread_id', 'forum_replies', ['thread_id'])
    op.create_index('ix_forum_replies_user_id', 'forum_replies', ['user_id'])


def downgrade() -> None:
    op.drop_table('forum_replies')
    op.drop_table('forum_threads')
    op.drop_table('downloads')
    op.drop_table('comments')
    op.drop_table('ratings')
    op.drop_table('documents')
    op.drop_table('shop_purchases')
    op.drop_table('shop_items')
    op.drop_table('user_badges')
    op.drop_table('badges')
    op.drop_table('user_profiles')
    document_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
