"""Domain entities for recipes and the per-user recipe history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

SOURCE_TYPE_LOCAL = "local"
SOURCE_TYPE_SPOONACULAR = "spoonacular"
SOURCE_TYPE_AI = "ai"
SOURCE_TYPE_EXTERNAL = "external"
SOURCE_TYPE_UNKNOWN = "unknown"

# Recipes fetched or generated on demand; only these are subject to cleanup.
EXTERNAL_SOURCE_TYPES: tuple[str, ...] = (
    SOURCE_TYPE_SPOONACULAR,
    SOURCE_TYPE_EXTERNAL,
    SOURCE_TYPE_AI,
    SOURCE_TYPE_UNKNOWN,
)


@dataclass
class Recipe:
    """Recipe document with the popularity counters used for retention."""

    id: int | None
    name: str
    source_type: str = SOURCE_TYPE_LOCAL
    source_id: str | None = None
    image: str | None = None
    is_featured: bool = False
    view_count: int = 0
    favorite_count: int = 0
    search_count: int = 0
    last_viewed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_external(self) -> bool:
        return self.source_type in EXTERNAL_SOURCE_TYPES


@dataclass
class RecipeHistoryEntry:
    """A recipe a user viewed or searched for.

    ``source_id``/``source_type``/``recipe_name`` are denormalized so an entry
    stays displayable after its recipe has been removed.
    """

    id: int | None
    user_id: int
    recipe_id: int | None = None
    source_type: str = SOURCE_TYPE_LOCAL
    source_id: str | None = None
    recipe_name: str | None = None
    search_query: str | None = None
    from_search: bool = False
    viewed_at: datetime | None = None


__all__ = [
    "EXTERNAL_SOURCE_TYPES",
    "Recipe",
    "RecipeHistoryEntry",
    "SOURCE_TYPE_AI",
    "SOURCE_TYPE_EXTERNAL",
    "SOURCE_TYPE_LOCAL",
    "SOURCE_TYPE_SPOONACULAR",
    "SOURCE_TYPE_UNKNOWN",
]
