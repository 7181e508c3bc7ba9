"""create_keywords_subreddits_posts

Revision ID: 4b1d2c3e5f60
Revises:
Create Date: 2025-07-30 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4b1d2c3e5f60'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _common_columns() -> list:
    return [
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False, comment='Auto-incrementing primary key'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, comment='Timestamp when record was created (UTC)'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, comment='Timestamp when record was last updated (UTC)'),
    ]


def upgrade() -> None:
    """
    Create the deal monitor tables.

    1. keywords - watched keywords, unique on ``keyword``
    2. subreddits - monitored subreddits, unique on normalized ``name``
    3. posts - matched posts, ``links`` stored as JSON text
    """
    op.create_table(
        'keywords',
        *_common_columns(),
        sa.Column('keyword', sa.String(length=500), nullable=False, comment='Trimmed keyword text'),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False, comment='Whether the keyword is currently watched'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_keywords')),
        sa.UniqueConstraint('keyword', name=op.f('uq_keywords_keyword')),
    )

    op.create_table(
        'subreddits',
        *_common_columns(),
        sa.Column('name', sa.String(length=500), nullable=False, comment='Normalized subreddit name (lowercase, no r/ prefix)'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_subreddits')),
        sa.UniqueConstraint('name', name=op.f('uq_subreddits_name')),
    )

    op.create_table(
        'posts',
        *_common_columns(),
        sa.Column('title', sa.String(length=500), nullable=False, comment='Trimmed post title, unique across posts'),
        sa.Column('description', sa.Text(), nullable=True, comment='Optional post body (max 10000 characters)'),
        sa.Column('links', sa.Text(), nullable=True, comment='JSON array of URLs found in the post'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_posts')),
    )
    op.create_index(op.f('ix_posts_title'), 'posts', ['title'], unique=False)
    op.create_index('ix_posts_created_at', 'posts', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_posts_created_at', table_name='posts')
    op.drop_index(op.f('ix_posts_title'), table_name='posts')
    op.drop_table('posts')
    op.drop_table('subreddits')
    op.drop_table('keywords')
