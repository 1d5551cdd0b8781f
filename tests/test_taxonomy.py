from datetime import datetime

import pytest
from sqlmodel import Session, select, func

from blog_cms.core.errors import DuplicateSlug, NotFound
from blog_cms.models.blog import BlogPost, BlogPostTag, Tag
from blog_cms.schemas.blog import CategoryCreate, CategoryUpdate, TagCreate, TagUpdate
from blog_cms.services.taxonomy import taxonomy_service


class TestCategories:
    def test_create_and_list(self, session: Session):
        taxonomy_service.create_category(session, CategoryCreate(name="B", slug="b"))
        taxonomy_service.create_category(session, CategoryCreate(name="A", slug="a", description="First"))

        categories = taxonomy_service.list_categories(session)

        assert [c.slug for c in categories] == ["a", "b"]
        assert categories[0].description == "First"

    def test_duplicate_slug(self, session: Session, category):
        with pytest.raises(DuplicateSlug):
            taxonomy_service.create_category(session, CategoryCreate(name="Tech", slug="technology"))

    def test_partial_update(self, session: Session, category):
        stale = datetime(2000, 1, 1)
        category.updated_at = stale
        session.add(category)
        session.commit()

        updated = taxonomy_service.update_category(session, CategoryUpdate(id=category.id, name="Tech"))

        assert updated.name == "Tech"
        assert updated.slug == "technology"
        assert updated.description == "Tech articles"
        assert updated.updated_at > stale

    def test_empty_update_refreshes_updated_at(self, session: Session, category):
        stale = datetime(2000, 1, 1)
        category.updated_at = stale
        session.add(category)
        session.commit()

        updated = taxonomy_service.update_category(session, CategoryUpdate(id=category.id))

        assert updated.updated_at > stale
        assert updated.name == "Technology"

    def test_update_clears_description(self, session: Session, category):
        update = CategoryUpdate.model_validate({"id": category.id, "description": None})

        assert taxonomy_service.update_category(session, update).description is None

    def test_update_missing(self, session: Session):
        with pytest.raises(NotFound):
            taxonomy_service.update_category(session, CategoryUpdate(id=999, name="X"))

    def test_delete_does_not_cascade(self, session: Session, category, make_post):
        category_id = category.id
        post = make_post(category_id=category_id)

        assert taxonomy_service.delete_category(session, category_id) is True

        session.refresh(post)
        assert post.category_id == category_id

    def test_delete_missing(self, session: Session):
        assert taxonomy_service.delete_category(session, 999) is False


class TestTags:
    def test_create_and_list(self, session: Session):
        taxonomy_service.create_tag(session, TagCreate(name="Zeta", slug="zeta"))
        taxonomy_service.create_tag(session, TagCreate(name="Alpha", slug="alpha"))

        assert [t.slug for t in taxonomy_service.list_tags(session)] == ["alpha", "zeta"]

    def test_update(self, session: Session, tags):
        updated = taxonomy_service.update_tag(session, TagUpdate(id=tags[0].id, slug="js"))

        assert updated.slug == "js"
        assert updated.name == "JavaScript"

    def test_noop_update_returns_tag(self, session: Session, tags):
        assert taxonomy_service.update_tag(session, TagUpdate(id=tags[1].id)).slug == "typescript"

    def test_update_missing(self, session: Session):
        with pytest.raises(NotFound):
            taxonomy_service.update_tag(session, TagUpdate(id=999))

    def test_delete_cascades_links_only(self, session: Session, tags, make_post):
        tag_id = tags[0].id
        first = make_post(tag_ids=[tag_id, tags[1].id])
        second = make_post(tag_ids=[tag_id])

        assert taxonomy_service.delete_tag(session, tag_id) is True

        assert session.get(Tag, tag_id) is None
        remaining = session.exec(select(BlogPostTag)).all()
        assert [(l.blog_post_id, l.tag_id) for l in remaining] == [(first.id, tags[1].id)]
        assert session.exec(select(func.count(BlogPost.id))).one() == 2
        assert session.get(BlogPost, second.id) is not None

    def test_delete_missing_raises(self, session: Session):
        with pytest.raises(NotFound) as exc_info:
            taxonomy_service.delete_tag(session, 999)

        assert exc_info.value.entity == "Tag"
