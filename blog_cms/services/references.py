# blog_cms/services/references.py
"""
Reference checks run before a blog post write.

A post may point at a category and at a set of tags. Both must exist when
the post is written; they may disappear later (categories are not
cascaded), which read paths tolerate.
"""
import logging
from typing import Iterable, Optional
from sqlmodel import Session

from blog_cms.core.errors import DanglingCategoryReference, DanglingTagReference
from blog_cms.crud.blog import blog_store

logger = logging.getLogger(__name__)


def validate_category(db: Session, category_id: Optional[int]) -> None:
    if category_id is None:
        return
    if blog_store.get_category(db, category_id) is None:
        logger.warning(f"Rejected write referencing missing category {category_id}")
        raise DanglingCategoryReference(category_id)


def validate_tags(db: Session, tag_ids: Optional[Iterable[int]]) -> None:
    """
    Check that every id in ``tag_ids`` names an existing tag.

    ``None`` means no tags were supplied and skips the check; an empty
    collection is trivially valid.
    """
    if tag_ids is None:
        return
    requested = set(tag_ids)
    if not requested:
        return
    found = {tag.id for tag in blog_store.get_tags_by_ids(db, requested)}
    missing = requested - found
    if missing:
        error = DanglingTagReference(missing)
        logger.warning(f"Rejected write referencing missing tags {error.tag_ids}")
        raise error


def validate_references(
    db: Session,
    category_id: Optional[int] = None,
    tag_ids: Optional[Iterable[int]] = None
) -> None:
    validate_category(db, category_id)
    validate_tags(db, tag_ids)
