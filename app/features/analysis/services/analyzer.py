import asyncio
from typing import Optional

import httpx

from app.features.analysis.schemas.analysis import AnalysisResult
from app.features.analysis.services.pagespeed_client import PageSpeedClient
from app.features.analysis.services.score_extractor import extract_scores, final_url
from app.features.analysis.services.tech_detection import TechDetectionClient
from app.platform.config import Settings
from app.platform.exceptions import ConfigurationError
from app.platform.logger import get_logger

logger = get_logger(__name__)


class WebsiteAnalyzer:
    """
    Runs one website check: mobile and desktop PageSpeed reports, plus a
    technology lookup when enabled, fetched concurrently.

    The result is all or nothing. If any call fails, or a payload is missing
    a score, the whole analysis raises and no partial scores are returned.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.transport = transport

    def check_configuration(self) -> None:
        if not self.settings.PAGESPEED_API_KEY:
            raise ConfigurationError("API key is not configured")
        if self.settings.TECH_DETECTION_ENABLED and not self.settings.WAPPALYZER_API_KEY:
            raise ConfigurationError("Technology detection API key is not configured")

    async def analyze(self, url: str) -> AnalysisResult:
        # Before any outbound call
        self.check_configuration()

        async with httpx.AsyncClient(
            timeout=self.settings.HTTP_TIMEOUT_SECONDS,
            transport=self.transport,
        ) as client:
            pagespeed = PageSpeedClient(
                client,
                api_key=self.settings.PAGESPEED_API_KEY,
                api_url=self.settings.PAGESPEED_API_URL,
            )
            tasks = [
                asyncio.ensure_future(pagespeed.run(url, "mobile")),
                asyncio.ensure_future(pagespeed.run(url, "desktop")),
            ]
            if self.settings.TECH_DETECTION_ENABLED:
                detector = TechDetectionClient(
                    client,
                    api_key=self.settings.WAPPALYZER_API_KEY,
                    api_url=self.settings.WAPPALYZER_API_URL,
                )
                tasks.append(asyncio.ensure_future(detector.detect_platform(url)))

            try:
                results = await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        mobile_payload, desktop_payload = results[0], results[1]
        platform = results[2] if len(results) > 2 else None

        result = AnalysisResult(
            mobile=extract_scores(mobile_payload),
            desktop=extract_scores(desktop_payload),
            final_url=final_url(mobile_payload),
            platform=platform,
        )
        logger.info(
            f"Analysis complete: url={url} mobile_performance={result.mobile.performance} "
            f"desktop_performance={result.desktop.performance} platform={platform}"
        )
        return result
