"""
Pricing Schemas

Tiers, offers and the quote request/response models.
"""
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.features.analysis.schemas.analysis import AnalysisResult, ScoreSet

CUSTOM_QUOTE = "CustomQuote"

# A concrete amount, or CUSTOM_QUOTE when no number can be given
Price = Union[float, Literal["CustomQuote"]]


class Tier(str, Enum):
    red = "Red"
    amber = "Amber"
    green = "Green"


class SiteSize(str, Enum):
    small = "small"
    medium = "medium"
    large = "large"


class ServiceCategory(str, Enum):
    performance = "performance"
    seo = "seo"
    accessibility = "accessibility"
    bundle = "bundle"


SCORED_CATEGORIES = (
    ServiceCategory.performance,
    ServiceCategory.seo,
    ServiceCategory.accessibility,
)


class SeverityTier(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tier: Tier
    name: str
    base_price: float = Field(..., alias="basePrice")
    problem_text: str = Field(..., alias="problemText")


class ServiceOffer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    price: Price
    display_price: str = Field(..., alias="displayPrice")
    details: List[str] = Field(default_factory=list)
    category: ServiceCategory
    tier: Tier


class OfferSet(BaseModel):
    """
    Offers for one set of scores.

    `bundle` is True when a single combined offer replaced the individual
    ones. `messages` holds the congratulations for Green categories.
    """
    offers: List[ServiceOffer] = Field(default_factory=list)
    bundle: bool = False
    messages: List[str] = Field(default_factory=list)


class QuoteRequest(BaseModel):
    """
    Either raw `scores`, or a full `analysis` whose mobile and desktop
    scores are averaged per category.
    """
    scores: Optional[ScoreSet] = None
    analysis: Optional[AnalysisResult] = None
    size: SiteSize = SiteSize.small
    platform: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "scores": {"performance": 45, "seo": 40, "accessibility": 30},
                "size": "medium",
                "platform": "WordPress",
            }
        }
    )

    @model_validator(mode="after")
    def exactly_one_score_source(self) -> "QuoteRequest":
        if (self.scores is None) == (self.analysis is None):
            raise ValueError("Provide exactly one of scores or analysis")
        return self
