"""Initial forum schema."""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20261018_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create users, categories, threads, posts, notifications, profile comments and sessions."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(30), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('icq', sa.String(32)),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='MEMBER'),
        sa.Column('status', sa.String(20), nullable=False, server_default='PENDING'),
        sa.Column('application_reason', sa.Text(), nullable=False, server_default=''),
        sa.Column('is_banned', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('bio', sa.Text()),
        sa.Column('avatar_url', sa.String(500)),
        sa.Column('banner_url', sa.String(500)),
        sa.Column('views', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_seen', sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.CheckConstraint("role IN ('MEMBER', 'OLDGEN', 'MODERATOR', 'ADMIN')", name='check_user_role'),
        sa.CheckConstraint("status IN ('PENDING', 'APPROVED', 'REJECTED')", name='check_user_status'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_status', 'users', ['status'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('pinned_message', sa.Text()),
    )
    op.create_index('ix_categories_id', 'categories', ['id'])
    op.create_index('ix_categories_name', 'categories', ['name'], unique=True)
    op.create_index('ix_categories_position', 'categories', ['position'])

    op.create_table(
        'threads',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id'), nullable=False),
        sa.Column('author_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(300), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.func.now()),
    )
    op.create_index('ix_threads_id', 'threads', ['id'])
    op.create_index('ix_threads_category_id', 'threads', ['category_id'])
    op.create_index('ix_threads_author_id', 'threads', ['author_id'])
    op.create_index('ix_threads_created_at', 'threads', ['created_at'])
    op.create_index('idx_thread_category_created', 'threads', ['category_id', 'created_at'])
    op.create_index('idx_thread_author_created', 'threads', ['author_id', 'created_at'])

    op.create_table(
        'posts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('thread_id', sa.Integer(), sa.ForeignKey('threads.id'), nullable=False),
        sa.Column('author_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('file_url', sa.String(500)),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.TIMESTAMP()),
    )
    op.create_index('ix_posts_id', 'posts', ['id'])
    op.create_index('ix_posts_thread_id', 'posts', ['thread_id'])
    op.create_index('ix_posts_author_id', 'posts', ['author_id'])
    op.create_index('ix_posts_created_at', 'posts', ['created_at'])
    op.create_index('idx_post_thread_created', 'posts', ['thread_id', 'created_at'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('from_user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('thread_id', sa.Integer(), sa.ForeignKey('threads.id'), nullable=False),
        sa.Column('post_id', sa.Integer(), sa.ForeignKey('posts.id'), nullable=False),
        sa.Column('type', sa.String(50), nullable=False, server_default='mention'),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.func.now()),
    )
    op.create_index('ix_notifications_id', 'notifications', ['id'])
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])
    op.create_index('ix_notifications_thread_id', 'notifications', ['thread_id'])
    op.create_index('ix_notifications_post_id', 'notifications', ['post_id'])
    op.create_index('ix_notifications_is_read', 'notifications', ['is_read'])
    op.create_index('ix_notifications_created_at', 'notifications', ['created_at'])
    op.create_index('ix_notifications_user_unread', 'notifications', ['user_id', 'is_read', 'created_at'])

    op.create_table(
        'profile_comments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('profile_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('author_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.func.now()),
    )
    op.create_index('ix_profile_comments_id', 'profile_comments', ['id'])
    op.create_index('ix_profile_comments_profile_id', 'profile_comments', ['profile_id'])
    op.create_index('ix_profile_comments_author_id', 'profile_comments', ['author_id'])
    op.create_index('ix_profile_comments_created_at', 'profile_comments', ['created_at'])
    op.create_index('idx_profile_comment_profile', 'profile_comments', ['profile_id', 'created_at'])

    op.create_table(
        'user_sessions',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.Column('expires_at', sa.TIMESTAMP(), nullable=False),
    )
    op.create_index('ix_user_sessions_user_id', 'user_sessions', ['user_id'])
    op.create_index('ix_user_sessions_expires_at', 'user_sessions', ['expires_at'])


def downgrade() -> None:
    """Drop every forum table."""
    op.drop_table('user_sessions')
    op.drop_table('profile_comments')
    op.drop_table('notifications')
    op.drop_table('posts')
    op.drop_table('threads')
    op.drop_table('categories')
    op.drop_table('users')
