"""
Upstream payload schemas.

Only the fields this service reads are declared; everything else in the
PageSpeed and Wappalyzer responses is ignored. A declared field that is
missing or null fails validation.
"""
from typing import List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# PageSpeed Insights v5
# ============================================================================

class LighthouseCategory(BaseModel):
    # Strict: a boolean or numeric string is not a score
    score: float = Field(..., strict=True, allow_inf_nan=False)


class LighthouseAudit(BaseModel):
    display_value: str = Field(..., alias="displayValue")


class LighthouseCategories(BaseModel):
    performance: LighthouseCategory
    seo: LighthouseCategory
    accessibility: LighthouseCategory


class LighthouseAudits(BaseModel):
    first_contentful_paint: LighthouseAudit = Field(..., alias="first-contentful-paint")


class LighthouseResult(BaseModel):
    categories: LighthouseCategories
    audits: LighthouseAudits


class PageSpeedPayload(BaseModel):
    id: str
    lighthouse_result: LighthouseResult = Field(..., alias="lighthouseResult")


# ============================================================================
# Wappalyzer v2 lookup
# ============================================================================

class TechnologyCategory(BaseModel):
    id: Optional[int] = None
    slug: str = ""
    name: str = ""


class Technology(BaseModel):
    slug: str
    name: str
    categories: List[TechnologyCategory] = Field(default_factory=list)


class TechnologyLookup(BaseModel):
    url: str = ""
    technologies: List[Technology] = Field(default_factory=list)
