from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.features.analysis.schemas.analysis import ScoreSet
from app.features.pricing.schemas.pricing import ServiceCategory, ServiceOffer, SiteSize


class ContactRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr = Field(...)
    url: str = Field(..., min_length=1, max_length=2048, description="Website that was checked")
    platform: Optional[str] = Field(None, max_length=100)
    size: SiteSize = SiteSize.small
    service: ServiceCategory = Field(..., description="Service the quote is requested for")
    scores: ScoreSet
    message: Optional[str] = Field(None, max_length=5000)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Jane Doe",
                "email": "jane@example.com",
                "url": "https://www.example.com",
                "platform": "WordPress",
                "size": "small",
                "service": "performance",
                "scores": {"performance": 42, "seo": 91, "accessibility": 78},
            }
        }
    )


class ContactSubmission(BaseModel):
    url: str
    offer: ServiceOffer
