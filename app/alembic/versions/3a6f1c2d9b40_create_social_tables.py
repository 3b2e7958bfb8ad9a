"""Create user, tweet, reply, favorite and follow tables

Revision ID: 3a6f1c2d9b40
Revises:
Create Date: 2026-10-18 10:04:51.218533

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a6f1c2d9b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'user',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('first_name', sa.String(120), nullable=False),
        sa.Column('last_name', sa.String(120), nullable=False),
        sa.Column('user_name', sa.String(120), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('birthday', sa.Date, nullable=False),
        sa.Column('bio', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_name', name='uq_user_user_name'),
        sa.UniqueConstraint('email', name='uq_user_email'),
    )
    op.create_index('ix_user_id', 'user', ['id'])

    op.create_table(
        'tweet',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('content', sa.String(280), nullable=False),
        sa.Column('user_id', sa.Integer, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_tweet_id', 'tweet', ['id'])
    op.create_index('ix_tweet_user_id', 'tweet', ['user_id'])

    op.create_table(
        'reply',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('user_id', sa.Integer, nullable=False),
        sa.Column('tweet_id', sa.Integer, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tweet_id'], ['tweet.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_reply_id', 'reply', ['id'])
    op.create_index('ix_reply_user_id', 'reply', ['user_id'])
    op.create_index('ix_reply_tweet_id', 'reply', ['tweet_id'])

    op.create_table(
        'favorite',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer, nullable=False),
        sa.Column('tweet_id', sa.Integer, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tweet_id'], ['tweet.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'tweet_id', name='uq_favorite_user_tweet'),
    )
    op.create_index('ix_favorite_id', 'favorite', ['id'])
    op.create_index('ix_favorite_tweet_id', 'favorite', ['tweet_id'])

    op.create_table(
        'follow',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('follower_id', sa.Integer, nullable=False),
        sa.Column('following_id', sa.Integer, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['follower_id'], ['user.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['following_id'], ['user.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('follower_id', 'following_id', name='uq_follow_pair'),
        sa.CheckConstraint(
            'follower_id <> following_id', name='ck_follow_not_self'
        ).ddl_if(dialect=('sqlite', 'postgresql')),
    )
    op.create_index('ix_follow_id', 'follow', ['id'])
    op.create_index('ix_follow_following_id', 'follow', ['following_id'])


def downgrade() -> None:
    op.drop_table('follow')
    op.drop_table('favorite')
    op.drop_table('reply')
    op.drop_table('tweet')
    op.drop_table('user')
