from datetime import datetime, timedelta
from sqlmodel import Session

from blog_cms.core.config import settings
from blog_cms.schemas.blog import BlogPostFilter
from blog_cms.services.blog_posts import blog_post_service
from blog_cms.services.post_query import query_posts, count_posts, page_bounds

BASE = datetime(2024, 1, 1, 12, 0, 0)


def at(minutes: int) -> datetime:
    return BASE + timedelta(minutes=minutes)


class TestOrdering:
    def test_newest_first(self, session: Session, make_post):
        old = make_post(created_at=at(0))
        new = make_post(created_at=at(10))
        mid = make_post(created_at=at(5))

        posts = query_posts(session)

        assert [p.id for p in posts] == [new.id, mid.id, old.id]

    def test_ties_broken_by_id(self, session: Session, make_post):
        first = make_post(created_at=at(0))
        second = make_post(created_at=at(0))
        third = make_post(created_at=at(0))

        posts = query_posts(session, BlogPostFilter())

        assert [p.id for p in posts] == [third.id, second.id, first.id]

    def test_pages_do_not_overlap_on_ties(self, session: Session, make_post):
        created = [make_post(created_at=at(0)) for _ in range(5)]

        page_one = query_posts(session, BlogPostFilter(limit=2, offset=0))
        page_two = query_posts(session, BlogPostFilter(limit=2, offset=2))
        page_three = query_posts(session, BlogPostFilter(limit=2, offset=4))

        seen = [p.id for p in page_one + page_two + page_three]
        assert sorted(seen) == sorted(p.id for p in created)
        assert len(set(seen)) == 5


class TestFilters:
    def test_published_and_category(self, session: Session, category, make_post):
        match_old = make_post(category_id=category.id, created_at=at(1))
        match_new = make_post(category_id=category.id, created_at=at(2))
        make_post(category_id=category.id, published=False, created_at=at(3))
        make_post(category_id=None, created_at=at(4))

        posts = query_posts(session, BlogPostFilter(published=True, category_id=category.id))

        assert [p.id for p in posts] == [match_new.id, match_old.id]

    def test_unpublished_only(self, session: Session, make_post):
        draft = make_post(published=False)
        make_post(published=True)

        posts = query_posts(session, BlogPostFilter(published=False))

        assert [p.id for p in posts] == [draft.id]

    def test_tag_filter_returns_each_post_once(self, session: Session, tags, make_post):
        both = make_post(tag_ids=[tags[0].id, tags[1].id], created_at=at(2))
        one = make_post(tag_ids=[tags[0].id], created_at=at(1))
        make_post(tag_ids=[tags[1].id], created_at=at(3))

        posts = query_posts(session, BlogPostFilter(tag_id=tags[0].id))

        assert [p.id for p in posts] == [both.id, one.id]

    def test_tag_filter_combined(self, session: Session, category, tags, make_post):
        wanted = make_post(category_id=category.id, tag_ids=[tags[2].id])
        make_post(category_id=None, tag_ids=[tags[2].id])
        make_post(category_id=category.id, tag_ids=[tags[2].id], published=False)

        post_filter = BlogPostFilter(published=True, category_id=category.id, tag_id=tags[2].id)

        assert [p.id for p in query_posts(session, post_filter)] == [wanted.id]
        assert count_posts(session, post_filter) == 1

    def test_unknown_tag(self, session: Session, make_post):
        make_post()
        assert query_posts(session, BlogPostFilter(tag_id=999)) == []


class TestPagination:
    def test_no_filter_is_unpaginated(self, session: Session, make_post):
        for _ in range(settings.DEFAULT_PAGE_SIZE + 3):
            make_post()

        assert len(query_posts(session)) == settings.DEFAULT_PAGE_SIZE + 3
        assert page_bounds(None) == (None, 0)

    def test_filter_applies_default_limit(self, session: Session, make_post):
        for _ in range(settings.DEFAULT_PAGE_SIZE + 3):
            make_post()

        assert len(query_posts(session, BlogPostFilter())) == settings.DEFAULT_PAGE_SIZE
        assert count_posts(session, BlogPostFilter()) == settings.DEFAULT_PAGE_SIZE + 3

    def test_limit_and_offset(self, session: Session, make_post):
        posts = [make_post(created_at=at(i)) for i in range(5)]

        page = query_posts(session, BlogPostFilter(limit=2, offset=1))

        assert [p.id for p in page] == [posts[3].id, posts[2].id]

    def test_offset_past_end(self, session: Session, make_post):
        make_post()
        assert query_posts(session, BlogPostFilter(offset=10)) == []


class TestAccessors:
    def test_public_feed_forces_published(self, session: Session, make_post):
        live = make_post()
        make_post(published=False)

        posts = blog_post_service.list_published_posts(session, BlogPostFilter(published=False))

        assert [p.id for p in posts] == [live.id]

    def test_public_feed_without_filter(self, session: Session, make_post):
        live = make_post()
        make_post(published=False)

        assert [p.id for p in blog_post_service.list_published_posts(session)] == [live.id]

    def test_admin_listing_includes_drafts(self, session: Session, make_post):
        live = make_post(created_at=at(1))
        draft = make_post(published=False, created_at=at(2))

        assert [p.id for p in blog_post_service.list_posts(session)] == [draft.id, live.id]

    def test_dangling_category_does_not_break_listing(self, session: Session, category, make_post):
        category_id = category.id
        post = make_post(category_id=category_id)
        session.delete(category)
        session.commit()

        posts = query_posts(session, BlogPostFilter(category_id=category_id))

        assert [p.id for p in posts] == [post.id]
