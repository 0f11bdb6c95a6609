"""Category table models.

The category set is closed. The table below only attaches keywords,
weight multipliers and default targets to it, in classification priority
order.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Category(str, Enum):
    """Topical buckets used for distribution steering."""

    AIML = "aiml"
    TECH = "tech"
    SCIENCE = "science"
    CULTURE = "culture"
    BUSINESS = "business"
    NEWS = "news"
    TECHNICAL = "technical"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        """Human-readable category name."""
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: dict[Category, str] = {
    Category.AIML: "AI/ML",
    Category.TECH: "Technology",
    Category.SCIENCE: "Science/Math",
    Category.CULTURE: "Culture/Entertainment",
    Category.BUSINESS: "Business/Economics",
    Category.NEWS: "News/Media",
    Category.TECHNICAL: "Technical Specialties",
    Category.OTHER: "Other",
}


def parse_category(key: str | Category) -> Category | None:
    """Resolve a category id or display name, or None if unknown.

    Args:
        key: Category id ("aiml"), display name ("AI/ML") or Category

    Returns:
        Matching Category or None
    """
    if isinstance(key, Category):
        return key
    normalized = key.strip().lower()
    for category in Category:
        if normalized in (category.value, category.display_name.lower()):
            return category
    return None


class CategoryDefinition(BaseModel):
    """Keywords and steering parameters for one category.

    Attributes:
        id: Category this entry describes
        name: Display name
        keywords: Substrings matched case-insensitively against topics
        weight_multiplier: Base multiplier applied when rebalancing
        default_target: Default desired item count
    """

    model_config = ConfigDict(frozen=True)

    id: Category
    name: str
    keywords: list[str] = Field(..., min_length=1)
    weight_multiplier: float = Field(default=1.0, gt=0)
    default_target: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_not_other(self) -> "CategoryDefinition":
        """The fallback category carries no keywords."""
        if self.id is Category.OTHER:
            raise ValueError("'other' is the fallback category and cannot be defined")
        return self


class CategoryTable(BaseModel):
    """Priority-ordered category definitions."""

    model_config = ConfigDict(frozen=True)

    categories: list[CategoryDefinition] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_unique(self) -> "CategoryTable":
        """Each category may appear once."""
        ids = [c.id for c in self.categories]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate category ids in category table")
        return self

    def get(self, category: Category) -> CategoryDefinition | None:
        """Look up a definition by category."""
        for definition in self.categories:
            if definition.id is category:
                return definition
        return None

    def multiplier(self, category: Category) -> float:
        """Base weight multiplier for a category (1.0 when undefined)."""
        definition = self.get(category)
        return definition.weight_multiplier if definition else 1.0

    def default_targets(self) -> dict[str, int]:
        """Default distribution targets keyed by category id."""
        return {c.id.value: c.default_target for c in self.categories}


__all__ = [
    "Category",
    "CategoryDefinition",
    "CategoryTable",
    "parse_category",
]
