# blog_cms/services/taxonomy.py
"""
Category and tag management.

Categories are weakly referenced by posts: deleting one leaves its posts
pointing at nothing. Tags own nothing either, but their post links are
removed together with the tag.
"""
import logging
from typing import List
from sqlmodel import Session

from blog_cms.core.errors import NotFound
from blog_cms.crud.blog import blog_store
from blog_cms.database.session import unit_of_work
from blog_cms.models.blog import Category, Tag
from blog_cms.schemas.blog import CategoryCreate, CategoryUpdate, TagCreate, TagUpdate

logger = logging.getLogger(__name__)


class TaxonomyService:
    """Service for categories and tags."""

    # ============ Categories ============

    @staticmethod
    def create_category(db: Session, data: CategoryCreate) -> Category:
        with unit_of_work(db):
            category = blog_store.create_category(db, data.model_dump())
        db.refresh(category)
        logger.info(f"Created category #{category.id} '{category.slug}'")
        return category

    @staticmethod
    def list_categories(db: Session) -> List[Category]:
        return blog_store.get_categories(db)

    @staticmethod
    def update_category(db: Session, data: CategoryUpdate) -> Category:
        with unit_of_work(db):
            category = blog_store.get_category(db, data.id)
            if not category:
                raise NotFound("Category", data.id)
            blog_store.update_category(
                db, category, data.model_dump(exclude_unset=True, exclude={'id'})
            )
        db.refresh(category)
        return category

    @staticmethod
    def delete_category(db: Session, category_id: int) -> bool:
        """Delete a category without touching the posts that reference it."""
        with unit_of_work(db):
            deleted = blog_store.delete_category(db, category_id) > 0
        if deleted:
            logger.info(f"Deleted category #{category_id}")
        return deleted

    # ============ Tags ============

    @staticmethod
    def create_tag(db: Session, data: TagCreate) -> Tag:
        with unit_of_work(db):
            tag = blog_store.create_tag(db, data.model_dump())
        db.refresh(tag)
        logger.info(f"Created tag #{tag.id} '{tag.slug}'")
        return tag

    @staticmethod
    def list_tags(db: Session) -> List[Tag]:
        return blog_store.get_tags(db)

    @staticmethod
    def update_tag(db: Session, data: TagUpdate) -> Tag:
        with unit_of_work(db):
            tag = blog_store.get_tag(db, data.id)
            if not tag:
                raise NotFound("Tag", data.id)
            values = data.model_dump(exclude_unset=True, exclude={'id'})
            if values:
                blog_store.update_tag(db, tag, values)
        db.refresh(tag)
        return tag

    @staticmethod
    def delete_tag(db: Session, tag_id: int) -> bool:
        """
        Delete a tag and every post link to it.

        Raises:
            NotFound: the tag does not exist (nothing is removed)
        """
        with unit_of_work(db):
            unlinked = blog_store.delete_tag_links(db, tag_id)
            if blog_store.delete_tag(db, tag_id) == 0:
                logger.warning(f"Delete of missing tag #{tag_id}")
                raise NotFound("Tag", tag_id)
        logger.info(f"Deleted tag #{tag_id} and {unlinked} post link(s)")
        return True


# Singleton instance
taxonomy_service = TaxonomyService()
