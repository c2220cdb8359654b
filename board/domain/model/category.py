"""Category entity.

Every post belongs to exactly one category. A category that still has posts
cannot be deleted.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from board.domain.model.common import Changes, DomainModel, Filter
from board.domain.value import CategoryId


class Category(DomainModel):
    id: CategoryId
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CategoryCreate(DomainModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None


class CategoryUpdate(Changes):
    nullable_fields = frozenset({"description"})

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None


class CategoryFilter(Filter):
    name: Optional[str] = None
