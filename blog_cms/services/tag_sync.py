# blog_cms/services/tag_sync.py
import logging
from typing import Iterable
from sqlmodel import Session

from blog_cms.crud.blog import blog_store

logger = logging.getLogger(__name__)


def set_initial_post_tags(db: Session, post_id: int, tag_ids: Iterable[int]) -> int:
    """Attach tags to a freshly created post. Returns rows inserted."""
    desired = set(tag_ids)
    if not desired:
        return 0
    return blog_store.add_post_tags(db, post_id, desired)


def replace_post_tags(db: Session, post_id: int, tag_ids: Iterable[int]) -> int:
    """
    Make the post's association rows exactly match ``tag_ids``.

    Existing rows are all removed and the desired set is inserted again,
    so no add/remove diff is ever computed. An empty set clears the post.
    Returns rows inserted.
    """
    desired = set(tag_ids)
    removed = blog_store.delete_post_tags(db, post_id)
    inserted = blog_store.add_post_tags(db, post_id, desired)
    logger.debug(f"Post #{post_id} tags replaced: {removed} removed, {inserted} inserted")
    return inserted
