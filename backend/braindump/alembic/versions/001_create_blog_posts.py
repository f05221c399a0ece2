"""Create blog_posts

Revision ID: 001_blog_posts
Revises:
Create Date: 2025-08-02

"""
from alembic import op
import sqlalchemy as sa


revision = "001_blog_posts"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "blog_posts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "category",
            sa.String(length=64),
            nullable=False,
            server_default="thought",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_blog_posts_created_at", "blog_posts", ["created_at"])
    op.create_index("ix_blog_posts_category", "blog_posts", ["category"])


def downgrade() -> None:
    op.drop_index("ix_blog_posts_category", table_name="blog_posts")
    op.drop_index("ix_blog_posts_created_at", table_name="blog_posts")
    op.drop_table("blog_posts")
