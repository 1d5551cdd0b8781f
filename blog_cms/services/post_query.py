# blog_cms/services/post_query.py
"""
Listing query for blog posts.

Filters combine with AND. Results are newest first, with the id as a
secondary key so that posts sharing a ``created_at`` still page stably.
"""
from sqlmodel import Session, select, func, and_
from typing import List, Optional

from blog_cms.core.config import settings
from blog_cms.models.blog import BlogPost, BlogPostTag
from blog_cms.schemas.blog import BlogPostFilter


def _conditions(post_filter: Optional[BlogPostFilter]) -> list:
    conditions = []
    if post_filter is None:
        return conditions

    if post_filter.published is not None:
        conditions.append(BlogPost.published == post_filter.published)

    if post_filter.category_id is not None:
        conditions.append(BlogPost.category_id == post_filter.category_id)

    # A subquery rather than a join: a post matches at most once
    if post_filter.tag_id is not None:
        tagged = select(BlogPostTag.blog_post_id).where(
            BlogPostTag.tag_id == post_filter.tag_id
        )
        conditions.append(BlogPost.id.in_(tagged))

    return conditions


def page_bounds(post_filter: Optional[BlogPostFilter]) -> tuple[Optional[int], int]:
    """Return (limit, offset); no filter at all means no pagination."""
    if post_filter is None:
        return None, 0
    limit = post_filter.limit if post_filter.limit is not None else settings.DEFAULT_PAGE_SIZE
    offset = post_filter.offset if post_filter.offset is not None else 0
    return limit, offset


def build_post_query(post_filter: Optional[BlogPostFilter] = None):
    query = select(BlogPost)
    conditions = _conditions(post_filter)
    if conditions:
        query = query.where(and_(*conditions))

    query = query.order_by(BlogPost.created_at.desc(), BlogPost.id.desc())

    limit, offset = page_bounds(post_filter)
    if limit is not None:
        query = query.limit(limit)
    if offset:
        query = query.offset(offset)
    return query


def query_posts(db: Session, post_filter: Optional[BlogPostFilter] = None) -> List[BlogPost]:
    return db.exec(build_post_query(post_filter)).all()


def count_posts(db: Session, post_filter: Optional[BlogPostFilter] = None) -> int:
    """Total number of posts matching the filter, ignoring pagination."""
    count_query = select(func.count(BlogPost.id))
    conditions = _conditions(post_filter)
    if conditions:
        count_query = count_query.where(and_(*conditions))
    return db.exec(count_query).first() or 0
