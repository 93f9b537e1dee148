"""
Analysis Schemas

Request and response models for the website check endpoint.
"""
import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SCORE_MIN = 0.0
SCORE_MAX = 100.0


def clamp_score(value: float) -> float:
    value = float(value)
    if math.isnan(value):
        raise ValueError("Score must be a number")
    return max(SCORE_MIN, min(SCORE_MAX, value))


class AnalyzeRequest(BaseModel):
    """Request to analyze a single website."""
    # Optional so that a missing url is reported as "URL is required"
    url: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "url": "https://www.example.com"
            }
        }
    )


class ScoreSet(BaseModel):
    """Performance, SEO and accessibility scores on a 0-100 scale."""
    model_config = ConfigDict(frozen=True)

    performance: float = Field(..., allow_inf_nan=False)
    seo: float = Field(..., allow_inf_nan=False)
    accessibility: float = Field(..., allow_inf_nan=False)

    @field_validator("performance", "seo", "accessibility")
    @classmethod
    def clamp(cls, value: float) -> float:
        return clamp_score(value)


class StrategyScores(ScoreSet):
    """Scores for one device strategy plus the first contentful paint shown to the user."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    first_contentful_paint: str = Field(..., alias="firstContentfulPaint")


class AnalysisResult(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "mobile": {
                    "performance": 42.0,
                    "seo": 91.0,
                    "accessibility": 78.0,
                    "firstContentfulPaint": "3.1 s",
                },
                "desktop": {
                    "performance": 88.0,
                    "seo": 91.0,
                    "accessibility": 80.0,
                    "firstContentfulPaint": "0.9 s",
                },
                "finalUrl": "https://www.example.com/",
                "platform": "WordPress",
            }
        },
    )

    mobile: StrategyScores
    desktop: StrategyScores
    final_url: str = Field(..., alias="finalUrl")
    platform: Optional[str] = None
