"""Create blog tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create tables for posts, categories, tags and post/tag links."""

    # Create categories table
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_categories_slug', 'categories', ['slug'], unique=True)

    # Create tags table
    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('slug', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tags_slug', 'tags', ['slug'], unique=True)

    # Create blog_posts table; category_id is deliberately not a foreign key
    op.create_table(
        'blog_posts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('excerpt', sa.Text(), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('publication_date', sa.DateTime(), nullable=True),
        sa.Column('category_id', sa.Integer(), nullable=True),
        sa.Column('author', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_blog_posts_slug', 'blog_posts', ['slug'], unique=True)
    op.create_index('ix_blog_posts_published', 'blog_posts', ['published'])
    op.create_index('ix_blog_posts_category_id', 'blog_posts', ['category_id'])
    op.create_index('ix_blog_posts_created_at', 'blog_posts', ['created_at'])

    # Create blog_post_tags junction table
    op.create_table(
        'blog_post_tags',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('blog_post_id', sa.Integer(), nullable=False),
        sa.Column('tag_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['blog_post_id'], ['blog_posts.id']),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id']),
        sa.UniqueConstraint('blog_post_id', 'tag_id', name='uq_blog_post_tags_post_tag'),
    )
    op.create_index('ix_blog_post_tags_blog_post_id', 'blog_post_tags', ['blog_post_id'])
    op.create_index('ix_blog_post_tags_tag_id', 'blog_post_tags', ['tag_id'])


def downgrade():
    """Drop blog tables."""
    op.drop_index('ix_blog_post_tags_tag_id', table_name='blog_post_tags')
    op.drop_index('ix_blog_post_tags_blog_post_id', table_name='blog_post_tags')
    op.drop_table('blog_post_tags')

    op.drop_index('ix_blog_posts_created_at', table_name='blog_posts')
    op.drop_index('ix_blog_posts_category_id', table_name='blog_posts')
    op.drop_index('ix_blog_posts_published', table_name='blog_posts')
    op.drop_index('ix_blog_posts_slug', table_name='blog_posts')
    op.drop_table('blog_posts')

    op.drop_index('ix_tags_slug', table_name='tags')
    op.drop_table('tags')

    op.drop_index('ix_categories_slug', table_name='categories')
    op.drop_table('categories')
