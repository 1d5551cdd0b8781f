# blog_cms/services/__init__.py
"""
Content repository services: posts, categories and tags.
"""

from blog_cms.services.blog_posts import BlogPostService, blog_post_service
from blog_cms.services.taxonomy import TaxonomyService, taxonomy_service

__all__ = [
    "BlogPostService",
    "blog_post_service",
    "TaxonomyService",
    "taxonomy_service",
]
