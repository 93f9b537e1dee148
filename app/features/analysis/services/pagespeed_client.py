from typing import Any, Dict, List, Tuple

import httpx

from app.platform.exceptions import UpstreamError
from app.platform.logger import get_logger

logger = get_logger(__name__)

STRATEGIES = ("mobile", "desktop")
CATEGORIES = ("PERFORMANCE", "SEO", "ACCESSIBILITY")


class PageSpeedClient:
    """
    Thin wrapper around the PageSpeed Insights `runPagespeed` endpoint.
    One call per strategy, no retries.
    """

    def __init__(self, client: httpx.AsyncClient, api_key: str, api_url: str):
        self.client = client
        self.api_key = api_key
        self.api_url = api_url

    def build_params(self, url: str, strategy: str) -> List[Tuple[str, str]]:
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy: {strategy}")

        params = [
            ("url", url),
            ("strategy", strategy.upper()),
            ("key", self.api_key),
        ]
        params.extend(("category", category) for category in CATEGORIES)
        return params

    async def run(self, url: str, strategy: str) -> Dict[str, Any]:
        params = self.build_params(url, strategy)
        logger.info(f"[pagespeed] Request start: strategy={strategy} url={url}")

        try:
            response = await self.client.get(self.api_url, params=params)
        except httpx.HTTPError as e:
            # str(e) can carry the request URL, which includes the key
            raise UpstreamError(
                f"PageSpeed {strategy} request failed: {type(e).__name__}"
            ) from e

        if response.is_error:
            logger.error(
                f"[pagespeed] Non-success status: strategy={strategy} "
                f"status={response.status_code} body={response.text[:500]}"
            )
            raise UpstreamError(
                f"PageSpeed {strategy} request returned {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(f"PageSpeed {strategy} response is not JSON") from e

        logger.info(f"[pagespeed] Response: strategy={strategy} status={response.status_code}")
        return data
