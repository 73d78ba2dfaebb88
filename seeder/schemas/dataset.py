"""Schemas for records read from the product dataset."""

import re
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

_LEVEL_RE = re.compile(r"(\d+)$")


class ProductRecord(BaseModel):
    """One product of the sample dataset (Algolia/Best Buy record layout)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    object_id: str | None = Field(None, alias="objectID")
    name: str = Field(..., min_length=1)
    description: str = ""
    brand: str | None = None
    categories: list[str] = Field(default_factory=list)
    hierarchical_categories: dict[str, str] = Field(
        default_factory=dict, alias="hierarchicalCategories"
    )
    type: str | None = None
    price: Decimal = Field(..., ge=0)
    image: str | None = None
    url: str | None = None
    free_shipping: bool = False
    rating: int | None = Field(None, ge=0, le=5)
    popularity: int | None = None

    @property
    def category_path(self) -> str | None:
        """Deepest level of ``hierarchicalCategories`` (``lvl0`` < ``lvl1`` < ...)."""
        if not self.hierarchical_categories:
            return None

        def level(key: str) -> int:
            match = _LEVEL_RE.search(key)
            return int(match.group(1)) if match else -1

        deepest = max(self.hierarchical_categories, key=level)
        return self.hierarchical_categories[deepest]
