# blog_cms/models/blog.py
from sqlmodel import SQLModel, Field, Column, Text
from sqlalchemy import DateTime, UniqueConstraint
from typing import Optional
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp; timestamp columns are plain DateTime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    slug: str = Field(max_length=100, unique=True, index=True)
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class Tag(SQLModel, table=True):
    __tablename__ = "tags"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=50)
    slug: str = Field(max_length=50, unique=True, index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class BlogPost(SQLModel, table=True):
    __tablename__ = "blog_posts"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    content: str = Field(sa_column=Column(Text, nullable=False))
    slug: str = Field(max_length=255, unique=True, index=True)
    excerpt: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    published: bool = Field(default=False, index=True)
    publication_date: Optional[datetime] = Field(default=None, sa_type=DateTime)
    # Weak reference: categories can be deleted without touching their posts
    category_id: Optional[int] = Field(default=None, index=True)
    author: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime, index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class BlogPostTag(SQLModel, table=True):
    __tablename__ = "blog_post_tags"
    __table_args__ = (
        UniqueConstraint("blog_post_id", "tag_id", name="uq_blog_post_tags_post_tag"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    blog_post_id: int = Field(foreign_key="blog_posts.id", index=True)
    tag_id: int = Field(foreign_key="tags.id", index=True)
