# blog_cms/crud/blog.py
from sqlmodel import Session, select, func, or_
from sqlalchemy.exc import IntegrityError
from typing import Any, Dict, Iterable, List, Optional

from blog_cms.core.errors import DuplicateSlug
from blog_cms.models.blog import Category, Tag, BlogPost, BlogPostTag, utcnow


class BlogStore:
    """
    Row-level persistence for categories, tags, posts and post/tag links.

    Methods flush but never commit: the calling service owns the
    transaction. Deleting a missing row is not an error here, it is
    reported as zero rows affected.
    """

    def _flush(self, db: Session, entity: str, slug: Optional[str]) -> None:
        # Rolling back is left to the transaction owner
        try:
            db.flush()
        except IntegrityError as e:
            raise DuplicateSlug(entity, slug) from e

    def _apply(self, row: Any, values: Dict[str, Any]) -> None:
        for field, value in values.items():
            setattr(row, field, value)

    # ============ Category Operations ============

    def create_category(self, db: Session, values: Dict[str, Any]) -> Category:
        now = utcnow()
        category = Category(**values, created_at=now, updated_at=now)
        db.add(category)
        self._flush(db, "Category", category.slug)
        return category

    def get_category(self, db: Session, category_id: int) -> Optional[Category]:
        return db.get(Category, category_id)

    def get_category_by_slug(self, db: Session, slug: str) -> Optional[Category]:
        return db.exec(select(Category).where(Category.slug == slug)).first()

    def get_categories(self, db: Session) -> List[Category]:
        return db.exec(select(Category).order_by(Category.name, Category.id)).all()

    def update_category(
        self,
        db: Session,
        category: Category,
        values: Dict[str, Any]
    ) -> Category:
        self._apply(category, values)
        category.updated_at = utcnow()
        db.add(category)
        self._flush(db, "Category", category.slug)
        return category

    def delete_category(self, db: Session, category_id: int) -> int:
        category = db.get(Category, category_id)
        if not category:
            return 0
        db.delete(category)
        db.flush()
        return 1

    # ============ Tag Operations ============

    def create_tag(self, db: Session, values: Dict[str, Any]) -> Tag:
        tag = Tag(**values, created_at=utcnow())
        db.add(tag)
        self._flush(db, "Tag", tag.slug)
        return tag

    def get_tag(self, db: Session, tag_id: int) -> Optional[Tag]:
        return db.get(Tag, tag_id)

    def get_tag_by_slug(self, db: Session, slug: str) -> Optional[Tag]:
        return db.exec(select(Tag).where(Tag.slug == slug)).first()

    def get_tags(self, db: Session) -> List[Tag]:
        return db.exec(select(Tag).order_by(Tag.name, Tag.id)).all()

    def get_tags_by_ids(self, db: Session, tag_ids: Iterable[int]) -> List[Tag]:
        """Fetch every existing tag whose id is in ``tag_ids`` in one query."""
        ids = set(tag_ids)
        if not ids:
            return []
        return db.exec(select(Tag).where(Tag.id.in_(ids)).order_by(Tag.id)).all()

    def update_tag(self, db: Session, tag: Tag, values: Dict[str, Any]) -> Tag:
        self._apply(tag, values)
        db.add(tag)
        self._flush(db, "Tag", tag.slug)
        return tag

    def delete_tag(self, db: Session, tag_id: int) -> int:
        tag = db.get(Tag, tag_id)
        if not tag:
            return 0
        db.delete(tag)
        db.flush()
        return 1

    # ============ Blog Post Operations ============

    def create_blog_post(self, db: Session, values: Dict[str, Any]) -> BlogPost:
        now = utcnow()
        blog_post = BlogPost(**values, created_at=now, updated_at=now)
        db.add(blog_post)
        self._flush(db, "BlogPost", blog_post.slug)
        return blog_post

    def get_blog_post(self, db: Session, post_id: int) -> Optional[BlogPost]:
        return db.get(BlogPost, post_id)

    def get_blog_post_by_slug(self, db: Session, slug: str) -> Optional[BlogPost]:
        return db.exec(select(BlogPost).where(BlogPost.slug == slug)).first()

    def get_published_post(
        self,
        db: Session,
        post_id: Optional[int] = None,
        slug: Optional[str] = None
    ) -> Optional[BlogPost]:
        """Published post matching ``post_id`` OR ``slug``; lowest id wins."""
        criteria = []
        if post_id is not None:
            criteria.append(BlogPost.id == post_id)
        if slug is not None:
            criteria.append(BlogPost.slug == slug)
        if not criteria:
            return None

        query = (
            select(BlogPost)
            .where(or_(*criteria), BlogPost.published == True)  # noqa: E712
            .order_by(BlogPost.id)
        )
        return db.exec(query).first()

    def update_blog_post(
        self,
        db: Session,
        blog_post: BlogPost,
        values: Dict[str, Any]
    ) -> BlogPost:
        self._apply(blog_post, values)
        blog_post.updated_at = utcnow()
        db.add(blog_post)
        self._flush(db, "BlogPost", blog_post.slug)
        return blog_post

    def delete_blog_post(self, db: Session, post_id: int) -> int:
        blog_post = db.get(BlogPost, post_id)
        if not blog_post:
            return 0
        db.delete(blog_post)
        db.flush()
        return 1

    # ============ Post/Tag Association Operations ============

    def get_post_tag_ids(self, db: Session, post_id: int) -> List[int]:
        return db.exec(
            select(BlogPostTag.tag_id)
            .where(BlogPostTag.blog_post_id == post_id)
            .order_by(BlogPostTag.tag_id)
        ).all()

    def add_post_tags(self, db: Session, post_id: int, tag_ids: Iterable[int]) -> int:
        """
        Bulk-insert association rows for a post.

        Pairs that already exist and repeated ids are skipped, so calling
        this twice with the same ids never duplicates rows. Returns the
        number of rows inserted.
        """
        existing = set(self.get_post_tag_ids(db, post_id))
        missing = sorted(set(tag_ids) - existing)
        for tag_id in missing:
            db.add(BlogPostTag(blog_post_id=post_id, tag_id=tag_id))
        if missing:
            db.flush()
        return len(missing)

    def delete_post_tags(self, db: Session, post_id: int) -> int:
        """Remove every association row of a post."""
        links = db.exec(select(BlogPostTag).where(BlogPostTag.blog_post_id == post_id)).all()
        for bpt in links:
            db.delete(bpt)
        db.flush()
        return len(links)

    def delete_tag_links(self, db: Session, tag_id: int) -> int:
        """Remove every association row pointing at a tag."""
        links = db.exec(select(BlogPostTag).where(BlogPostTag.tag_id == tag_id)).all()
        for bpt in links:
            db.delete(bpt)
        db.flush()
        return len(links)

    def get_tag_post_count(self, db: Session, tag_id: int) -> int:
        """Get the number of posts with a tag."""
        return db.exec(
            select(func.count(BlogPostTag.id)).where(BlogPostTag.tag_id == tag_id)
        ).first() or 0


# Create singleton instance
blog_store = BlogStore()
