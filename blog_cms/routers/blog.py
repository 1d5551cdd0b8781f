# blog_cms/routers/blog.py
from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlmodel import Session
from typing import Any, Dict, List, Optional, Type, TypeVar

from blog_cms.core.config import settings
from blog_cms.database.engine import get_db
from blog_cms.schemas.blog import (
    # Blog Post schemas
    BlogPostCreate, BlogPostUpdate, BlogPostFilter, BlogPostLookup,
    BlogPostRead, BlogPostDetail, BlogPostListResponse,
    # Category schemas
    CategoryCreate, CategoryUpdate, CategoryRead,
    # Tag schemas
    TagCreate, TagUpdate, TagRead,
    DeleteResult
)
from blog_cms.services.blog_posts import blog_post_service, published_filter
from blog_cms.services.post_query import count_posts, page_bounds
from blog_cms.services.taxonomy import taxonomy_service

router = APIRouter(
    prefix="/blog",
    tags=["blog"],
    responses={404: {"description": "Not found"}},
)

M = TypeVar("M", bound=BaseModel)


def _with_id(model: Type[M], item_id: int, payload: Dict[str, Any]) -> M:
    """Validate a partial-update body, keeping track of which fields were sent."""
    try:
        return model.model_validate({**payload, "id": item_id})
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_context=False))


def _post_filter(
    published: Optional[bool] = None,
    category_id: Optional[int] = None,
    tag_id: Optional[int] = None,
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: Optional[int] = Query(None, ge=0),
) -> BlogPostFilter:
    return BlogPostFilter(
        published=published,
        category_id=category_id,
        tag_id=tag_id,
        limit=limit,
        offset=offset,
    )


def _list_response(db: Session, posts, post_filter: BlogPostFilter) -> BlogPostListResponse:
    limit, offset = page_bounds(post_filter)
    return BlogPostListResponse(
        items=[BlogPostRead.model_validate(p) for p in posts],
        total=count_posts(db, post_filter),
        limit=limit,
        offset=offset
    )


# ========================================
# BLOG POST ENDPOINTS (ADMIN)
# ========================================

@router.post("/posts", response_model=BlogPostDetail, status_code=status.HTTP_201_CREATED)
def create_blog_post(post_data: BlogPostCreate, db: Session = Depends(get_db)):
    """Create a new blog post, optionally tagged."""
    post = blog_post_service.create_post(db, post_data)
    return blog_post_service.get_post_detail(db, post)


@router.get("/posts", response_model=BlogPostListResponse)
def get_blog_posts(
    post_filter: BlogPostFilter = Depends(_post_filter),
    db: Session = Depends(get_db)
):
    """
    List posts regardless of published state.

    **Query Parameters**:
    - published: Filter by published flag
    - category_id: Filter by category
    - tag_id: Filter by tag
    - limit: Page size (default 50)
    - offset: Number of posts to skip
    """
    posts = blog_post_service.list_posts(db, post_filter)
    return _list_response(db, posts, post_filter)


@router.get("/posts/{post_id}", response_model=BlogPostDetail)
def get_blog_post(post_id: int, db: Session = Depends(get_db)):
    """Get any post by id, published or not."""
    post = blog_post_service.get_post_for_admin(db, post_id)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog post not found"
        )
    return blog_post_service.get_post_detail(db, post)


@router.put("/posts/{post_id}", response_model=BlogPostDetail)
def update_blog_post(
    post_id: int,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db)
):
    """Partially update a post; omitted fields are left unchanged."""
    post_data = _with_id(BlogPostUpdate, post_id, payload)
    post = blog_post_service.update_post(db, post_data)
    return blog_post_service.get_post_detail(db, post)


@router.delete("/posts/{post_id}", response_model=DeleteResult)
def delete_blog_post(post_id: int, db: Session = Depends(get_db)):
    return DeleteResult(success=blog_post_service.delete_post(db, post_id))


# ========================================
# PUBLIC FEED ENDPOINTS
# ========================================

@router.get("/published", response_model=BlogPostListResponse)
def get_published_posts(
    post_filter: BlogPostFilter = Depends(_post_filter),
    db: Session = Depends(get_db)
):
    """List published posts, newest first."""
    post_filter = published_filter(post_filter)
    posts = blog_post_service.list_published_posts(db, post_filter)
    return _list_response(db, posts, post_filter)


@router.get("/published/post", response_model=BlogPostDetail)
def get_published_post(
    id: Optional[int] = None,
    slug: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """Get a published post by id or slug."""
    try:
        lookup = BlogPostLookup(id=id, slug=slug)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_context=False))

    post = blog_post_service.get_post(db, lookup)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog post not found"
        )
    return blog_post_service.get_post_detail(db, post)


# ========================================
# CATEGORY ENDPOINTS
# ========================================

@router.post("/categories", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
def create_category(category_data: CategoryCreate, db: Session = Depends(get_db)):
    return taxonomy_service.create_category(db, category_data)


@router.get("/categories", response_model=List[CategoryRead])
def get_categories(db: Session = Depends(get_db)):
    return taxonomy_service.list_categories(db)


@router.put("/categories/{category_id}", response_model=CategoryRead)
def update_category(
    category_id: int,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db)
):
    category_data = _with_id(CategoryUpdate, category_id, payload)
    return taxonomy_service.update_category(db, category_data)


@router.delete("/categories/{category_id}", response_model=DeleteResult)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    """Delete a category. Posts keep their (now dangling) category_id."""
    return DeleteResult(success=taxonomy_service.delete_category(db, category_id))


# ========================================
# TAG ENDPOINTS
# ========================================

@router.post("/tags", response_model=TagRead, status_code=status.HTTP_201_CREATED)
def create_tag(tag_data: TagCreate, db: Session = Depends(get_db)):
    return taxonomy_service.create_tag(db, tag_data)


@router.get("/tags", response_model=List[TagRead])
def get_tags(db: Session = Depends(get_db)):
    return taxonomy_service.list_tags(db)


@router.put("/tags/{tag_id}", response_model=TagRead)
def update_tag(
    tag_id: int,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db)
):
    tag_data = _with_id(TagUpdate, tag_id, payload)
    return taxonomy_service.update_tag(db, tag_data)


@router.delete("/tags/{tag_id}", response_model=DeleteResult)
def delete_tag(tag_id: int, db: Session = Depends(get_db)):
    """Delete a tag and its post links. 404 if the tag does not exist."""
    return DeleteResult(success=taxonomy_service.delete_tag(db, tag_id))
