# blog_cms/schemas/blog.py
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


def _require_text(v: Optional[str], field: str) -> Optional[str]:
    if v is not None and len(v.strip()) == 0:
        raise ValueError(f'{field} cannot be empty')
    return v


# Category Schemas
class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., max_length=100, pattern=SLUG_PATTERN)
    description: Optional[str] = None


class CategoryUpdate(BaseModel):
    id: int
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, max_length=100, pattern=SLUG_PATTERN)
    description: Optional[str] = None

    @field_validator('name', 'slug')
    def validate_not_null(cls, v, info):
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v


class CategoryRead(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# Tag Schemas
class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    slug: str = Field(..., max_length=50, pattern=SLUG_PATTERN)


class TagUpdate(BaseModel):
    id: int
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    slug: Optional[str] = Field(None, max_length=50, pattern=SLUG_PATTERN)

    @field_validator('name', 'slug')
    def validate_not_null(cls, v, info):
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v


class TagRead(BaseModel):
    id: int
    name: str
    slug: str
    created_at: datetime

    class Config:
        from_attributes = True


# Blog Post Schemas
class BlogPostCreate(BaseModel):
    title: str = Field(..., max_length=255)
    content: str
    slug: str = Field(..., max_length=255, pattern=SLUG_PATTERN)
    excerpt: Optional[str] = None
    published: bool = False
    publication_date: Optional[datetime] = None
    category_id: Optional[int] = None
    author: str = Field(..., max_length=255)
    # None means "no tags supplied"; [] is an explicit empty set
    tag_ids: Optional[List[int]] = None

    @field_validator('title', 'content', 'author')
    def validate_text(cls, v, info):
        return _require_text(v, info.field_name.capitalize())


class BlogPostUpdate(BaseModel):
    """
    Partial update of a blog post.

    Only fields present in the payload are applied (see ``model_fields_set``):
    an absent field is left unchanged, an explicit null clears a nullable
    field, and a value overwrites it. ``tag_ids`` replaces the whole tag set
    whenever it is present, including as an empty list.
    """
    id: int
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    slug: Optional[str] = Field(None, max_length=255, pattern=SLUG_PATTERN)
    excerpt: Optional[str] = None
    published: Optional[bool] = None
    publication_date: Optional[datetime] = None
    category_id: Optional[int] = None
    author: Optional[str] = Field(None, max_length=255)
    tag_ids: Optional[List[int]] = None

    @field_validator('title', 'content', 'slug', 'author', 'published', 'tag_ids')
    def validate_not_null(cls, v, info):
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v

    @field_validator('title', 'content', 'author')
    def validate_text(cls, v, info):
        return _require_text(v, info.field_name.capitalize())

    def has(self, field: str) -> bool:
        """Whether ``field`` was supplied in the payload."""
        return field in self.model_fields_set


class BlogPostFilter(BaseModel):
    published: Optional[bool] = None
    category_id: Optional[int] = None
    tag_id: Optional[int] = None
    limit: Optional[int] = Field(None, gt=0)
    offset: Optional[int] = Field(None, ge=0)


class BlogPostLookup(BaseModel):
    """Lookup by id, slug, or both (either one matching is enough)."""
    id: Optional[int] = None
    slug: Optional[str] = None

    @model_validator(mode='after')
    def validate_criteria(self):
        if self.id is None and self.slug is None:
            raise ValueError('Either id or slug must be provided')
        return self


class BlogPostRead(BaseModel):
    id: int
    title: str
    content: str
    slug: str
    excerpt: Optional[str]
    published: bool
    publication_date: Optional[datetime]
    category_id: Optional[int]
    author: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BlogPostDetail(BlogPostRead):
    """Blog post with its category resolved and its tags"""
    category: Optional[CategoryRead] = None
    tags: List[TagRead] = []


class BlogPostListResponse(BaseModel):
    """Paginated list of blog posts"""
    items: List[BlogPostRead]
    total: int
    limit: Optional[int]
    offset: int


class DeleteResult(BaseModel):
    success: bool


class ErrorResponse(BaseModel):
    """Standard error response format."""
    error: str = Field(..., description="Error type or code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = Field(None, description="Additional error details")
