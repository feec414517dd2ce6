"""Models for categories and category definitions."""

from pydantic import BaseModel, Field, field_validator, model_validator


class PriceRange(BaseModel):
    """Inclusive price band in whole currency units."""

    min: int = Field(..., ge=0, description="Lowest price")
    max: int = Field(..., ge=0, description="Highest price")

    @model_validator(mode="after")
    def _check_order(self) -> "PriceRange":
        if self.min > self.max:
            raise ValueError(f"price range min {self.min} exceeds max {self.max}")
        return self


class CategoryDefinition(BaseModel):
    """Definition of a product category and the keywords that select it."""

    model_config = {"frozen": True}

    key: str = Field(..., description="Stable category identifier")
    display_name: str = Field(..., description="Human-readable name")
    description: str = Field(..., description="What this category encompasses")
    keywords: list[str] = Field(..., min_length=1, description="Lowercase match strings")
    tags: list[str] = Field(default_factory=list, description="Short labels")
    price_range: PriceRange = Field(..., description="Typical price band")
    seasonal_fit: list[str] = Field(default_factory=lambda: ["all-season"])
    color_category: list[str] = Field(default_factory=list, description="Color affinity labels")

    @field_validator("keywords")
    @classmethod
    def _normalize_keywords(cls, keywords: list[str]) -> list[str]:
        normalized = [kw.lower() for kw in keywords]
        if len(set(normalized)) != len(normalized):
            raise ValueError("keyword list contains duplicates")
        return normalized


class CategorySummary(BaseModel):
    """Category entry as shown in the numbered review menu."""

    key: str
    display_name: str
    description: str
    tags: list[str]
    price_range: PriceRange


class FallbackDefinition(BaseModel):
    """Record template used when no category keyword matches."""

    key: str = "dress"
    display_name: str = "Designer Dress"
    description: str = "Contemporary fashion piece"
    tags: list[str] = Field(default_factory=lambda: ["fashion", "contemporary"])
    seasonal_fit: list[str] = Field(default_factory=lambda: ["all-season"])
    color_category: list[str] = Field(default_factory=lambda: ["versatile"])
    suggested_keywords: list[str] = Field(default_factory=lambda: ["dress", "fashion"])


class ProductSuggestion(BaseModel):
    """Placeholder product generated for a category."""

    name: str
    category: str
    estimated_price: int
    tags: list[str] = Field(default_factory=list)
