from typing import List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from app.features.analysis.schemas.upstream import TechnologyLookup
from app.platform.exceptions import UpstreamError
from app.platform.logger import get_logger

logger = get_logger(__name__)

# slug -> display name, in the order the offers know about them
KNOWN_PLATFORMS = {
    "wordpress": "WordPress",
    "shopify": "Shopify",
    "wix": "Wix",
    "squarespace": "Squarespace",
}
PLATFORM_CATEGORY_SLUGS = {"cms", "ecommerce"}

_lookup_adapter = TypeAdapter(List[TechnologyLookup])


def pick_platform(lookups: List[TechnologyLookup]) -> Optional[str]:
    """
    Known site builders win over any other CMS or shop system.
    Returns None when nothing platform-like was detected.
    """
    technologies = [tech for lookup in lookups for tech in lookup.technologies]

    for tech in technologies:
        if tech.slug.lower() in KNOWN_PLATFORMS:
            return KNOWN_PLATFORMS[tech.slug.lower()]

    for tech in technologies:
        if any(category.slug.lower() in PLATFORM_CATEGORY_SLUGS for category in tech.categories):
            return tech.name

    return None


class TechDetectionClient:
    def __init__(self, client: httpx.AsyncClient, api_key: str, api_url: str):
        self.client = client
        self.api_key = api_key
        self.api_url = api_url

    async def lookup(self, url: str) -> List[TechnologyLookup]:
        logger.info(f"[wappalyzer] Lookup start: url={url}")

        try:
            response = await self.client.get(
                self.api_url,
                params={"urls": url},
                headers={"x-api-key": self.api_key},
            )
        except httpx.HTTPError as e:
            raise UpstreamError(f"Technology lookup failed: {type(e).__name__}") from e

        if response.is_error:
            logger.error(
                f"[wappalyzer] Non-success status: status={response.status_code} "
                f"body={response.text[:500]}"
            )
            raise UpstreamError(f"Technology lookup returned {response.status_code}")

        try:
            return _lookup_adapter.validate_python(response.json())
        except (ValueError, ValidationError) as e:
            raise UpstreamError("Technology lookup returned a malformed payload") from e

    async def detect_platform(self, url: str) -> Optional[str]:
        platform = pick_platform(await self.lookup(url))
        logger.info(f"[wappalyzer] Detected platform={platform} url={url}")
        return platform
