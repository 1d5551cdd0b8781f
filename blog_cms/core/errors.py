"""
Domain errors raised by the blog content repository.

Every error carries a human-readable ``detail`` and the HTTP status the
transport layer should answer with. Extra attributes set on an instance are
rendered as error details by the exception handler in ``blog_cms.main``.
"""
from typing import Iterable, List


class BlogError(Exception):
    """Base exception for blog repository errors."""

    status_code: int = 400

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)

    @property
    def details(self) -> dict:
        return {
            k: v for k, v in self.__dict__.items()
            if k not in ("detail", "status_code")
        }


class DuplicateSlug(BlogError):
    """Exception raised when a slug is already taken by another row."""

    status_code = 409

    def __init__(self, entity: str, slug: str):
        self.entity = entity
        self.slug = slug
        super().__init__(f"{entity} with slug '{slug}' already exists")


class DanglingCategoryReference(BlogError):
    """Exception raised when a post references a category that does not exist."""

    status_code = 422

    def __init__(self, category_id: int):
        self.category_id = category_id
        super().__init__(f"Category with id {category_id} does not exist")


class DanglingTagReference(BlogError):
    """Exception raised when a post references tags that do not exist."""

    status_code = 422

    def __init__(self, tag_ids: Iterable[int]):
        self.tag_ids: List[int] = sorted(tag_ids)
        missing = ", ".join(str(tag_id) for tag_id in self.tag_ids)
        super().__init__(f"Tags with ids [{missing}] do not exist")


class NotFound(BlogError):
    """Exception raised when the target row of an operation is missing."""

    status_code = 404

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id {entity_id} not found")
