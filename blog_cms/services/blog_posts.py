# blog_cms/services/blog_posts.py
"""
Blog post repository.

Composes the reference checks, the row store and the tag synchronizer.
Every public operation is one unit of work: references are validated
before the first write, and any failure rolls back the whole operation,
so a rejected create never leaves a post or association rows behind.
"""
import logging
from typing import List, Optional
from sqlmodel import Session

from blog_cms.core.errors import NotFound
from blog_cms.crud.blog import blog_store
from blog_cms.database.session import unit_of_work
from blog_cms.models.blog import BlogPost
from blog_cms.schemas.blog import (
    BlogPostCreate, BlogPostUpdate, BlogPostFilter, BlogPostLookup,
    BlogPostDetail, CategoryRead, TagRead
)
from blog_cms.services.references import validate_references
from blog_cms.services.post_query import query_posts
from blog_cms.services.tag_sync import set_initial_post_tags, replace_post_tags

logger = logging.getLogger(__name__)

SCALAR_FIELDS = (
    'title', 'content', 'slug', 'excerpt', 'published',
    'publication_date', 'category_id', 'author',
)


class BlogPostService:
    """Create, update, delete and query blog posts."""

    @staticmethod
    def create_post(db: Session, post_data: BlogPostCreate) -> BlogPost:
        """
        Create a blog post and attach its tags.

        Args:
            db: Database session
            post_data: Validated post fields; ``tag_ids`` may be omitted

        Returns:
            The persisted BlogPost

        Raises:
            DanglingCategoryReference: category_id names no category
            DanglingTagReference: some tag_ids name no tag
            DuplicateSlug: the slug is taken
        """
        with unit_of_work(db):
            validate_references(db, post_data.category_id, post_data.tag_ids)

            blog_post = blog_store.create_blog_post(
                db, post_data.model_dump(include=set(SCALAR_FIELDS))
            )
            if post_data.tag_ids:
                set_initial_post_tags(db, blog_post.id, post_data.tag_ids)

        db.refresh(blog_post)
        logger.info(f"Created blog post #{blog_post.id} '{blog_post.slug}'")
        return blog_post

    @staticmethod
    def update_post(db: Session, post_data: BlogPostUpdate) -> BlogPost:
        """
        Apply a partial update.

        Only fields present in ``post_data`` are written; ``updated_at`` is
        refreshed regardless. When ``tag_ids`` is present the tag set is
        replaced, otherwise it is left alone.
        """
        with unit_of_work(db):
            blog_post = blog_store.get_blog_post(db, post_data.id)
            if not blog_post:
                logger.warning(f"Update of missing blog post #{post_data.id}")
                raise NotFound("BlogPost", post_data.id)

            validate_references(
                db,
                post_data.category_id if post_data.has('category_id') else None,
                post_data.tag_ids if post_data.has('tag_ids') else None,
            )

            update_data = post_data.model_dump(
                exclude_unset=True, include=set(SCALAR_FIELDS)
            )
            blog_store.update_blog_post(db, blog_post, update_data)

            if post_data.has('tag_ids'):
                replace_post_tags(db, blog_post.id, post_data.tag_ids)

        db.refresh(blog_post)
        logger.info(f"Updated blog post #{blog_post.id} fields {sorted(update_data)}")
        return blog_post

    @staticmethod
    def delete_post(db: Session, post_id: int) -> bool:
        """Delete a post and its tag links. Returns False if there was no such post."""
        with unit_of_work(db):
            blog_store.delete_post_tags(db, post_id)
            deleted = blog_store.delete_blog_post(db, post_id) > 0

        if deleted:
            logger.info(f"Deleted blog post #{post_id}")
        else:
            logger.info(f"Delete of missing blog post #{post_id} was a no-op")
        return deleted

    @staticmethod
    def get_post(db: Session, lookup: BlogPostLookup) -> Optional[BlogPost]:
        """
        Public single-post accessor.

        Matches on id OR slug when both are given, and only ever returns
        a published post. When both criteria match different rows, any
        one of them may be returned.
        """
        return blog_store.get_published_post(db, post_id=lookup.id, slug=lookup.slug)

    @staticmethod
    def get_post_for_admin(db: Session, post_id: int) -> Optional[BlogPost]:
        """Admin accessor: returns the post whatever its published state."""
        return blog_store.get_blog_post(db, post_id)

    @staticmethod
    def list_posts(
        db: Session,
        post_filter: Optional[BlogPostFilter] = None
    ) -> List[BlogPost]:
        """Admin listing: every post matching the filter."""
        return query_posts(db, post_filter)

    @staticmethod
    def list_published_posts(
        db: Session,
        post_filter: Optional[BlogPostFilter] = None
    ) -> List[BlogPost]:
        """Public feed: same listing with ``published`` forced to True."""
        return query_posts(db, published_filter(post_filter))

    @staticmethod
    def get_post_tag_ids(db: Session, post_id: int) -> List[int]:
        return blog_store.get_post_tag_ids(db, post_id)

    @staticmethod
    def get_post_detail(db: Session, blog_post: BlogPost) -> BlogPostDetail:
        """Resolve the post's category and tags; a deleted category reads as none."""
        category = None
        if blog_post.category_id is not None:
            category = blog_store.get_category(db, blog_post.category_id)

        tag_ids = blog_store.get_post_tag_ids(db, blog_post.id)
        tags = blog_store.get_tags_by_ids(db, tag_ids)

        return BlogPostDetail(
            **blog_post.model_dump(),
            category=CategoryRead.model_validate(category) if category else None,
            tags=[TagRead.model_validate(t) for t in tags]
        )


def published_filter(post_filter: Optional[BlogPostFilter]) -> BlogPostFilter:
    if post_filter is None:
        return BlogPostFilter(published=True)
    return post_filter.model_copy(update={'published': True})


# Singleton instance
blog_post_service = BlogPostService()
