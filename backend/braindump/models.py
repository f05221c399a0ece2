"""
Persisted models.

blog_posts is the only table. Posts are immutable once written; created_at is
assigned by the database (NOW()).
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Text, func
from sqlmodel import Field, SQLModel

DEFAULT_CATEGORY = "thought"


class PostBase(SQLModel):
    title: str = Field(sa_column=Column(Text, nullable=False))
    content: str = Field(sa_column=Column(Text, nullable=False))
    category: str = Field(default=DEFAULT_CATEGORY, max_length=64)


class Post(PostBase, table=True):
    __tablename__ = "blog_posts"

    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
            index=True,
        ),
    )
