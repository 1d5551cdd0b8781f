import os

# The app engine is built at import time; keep it off PostgreSQL in tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from blog_cms.main import app
from blog_cms.database.engine import get_db
from blog_cms.models.blog import Category, Tag, BlogPost, BlogPostTag

# Test database setup
@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session

@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_db] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()

@pytest.fixture(name="category")
def category_fixture(session: Session):
    category = Category(name="Technology", slug="technology", description="Tech articles")
    session.add(category)
    session.commit()
    session.refresh(category)
    return category

@pytest.fixture(name="tags")
def tags_fixture(session: Session):
    tags = [
        Tag(name="JavaScript", slug="javascript"),
        Tag(name="TypeScript", slug="typescript"),
        Tag(name="React", slug="react"),
    ]
    for tag in tags:
        session.add(tag)
    session.commit()
    for tag in tags:
        session.refresh(tag)
    return tags

@pytest.fixture(name="make_post")
def make_post_fixture(session: Session):
    """Insert a post row directly, bypassing the service."""
    counter = {"n": 0}

    def _make_post(tag_ids=(), **fields):
        counter["n"] += 1
        values = {
            "title": f"Post {counter['n']}",
            "content": "Some content",
            "slug": f"post-{counter['n']}",
            "author": "Author",
            "published": True,
        }
        values.update(fields)
        post = BlogPost(**values)
        session.add(post)
        session.commit()
        session.refresh(post)
        for tag_id in tag_ids:
            session.add(BlogPostTag(blog_post_id=post.id, tag_id=tag_id))
        session.commit()
        return post

    return _make_post
