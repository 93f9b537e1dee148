"""
Test configuration and fixtures for the Website Health Checker API.

Outbound PageSpeed, Wappalyzer and forms calls never leave the process:
they are answered by an httpx.MockTransport wired in through dependency
overrides.
"""

from typing import Any, Dict, Generator, List

import httpx
import pytest
from fastapi.testclient import TestClient

from app.features.analysis.dependencies.analyzer import get_analyzer
from app.features.analysis.services.analyzer import WebsiteAnalyzer
from app.main import create_app
from app.platform.config import Settings

TEST_URL = "https://www.example.com/"
FORMS_URL = "https://forms.example.test/f/contact"


def build_pagespeed_payload(
    performance: Any = 0.5,
    seo: Any = 0.75,
    accessibility: Any = 0.25,
    fcp: Any = "1.2 s",
    url: str = TEST_URL,
) -> Dict[str, Any]:
    """The parts of a runPagespeed response this service reads, plus some noise."""
    return {
        "id": url,
        "analysisUTCTimestamp": "2026-10-19T08:00:00.000Z",
        "lighthouseResult": {
            "finalUrl": url,
            "categories": {
                "performance": {"id": "performance", "title": "Performance", "score": performance},
                "seo": {"id": "seo", "title": "SEO", "score": seo},
                "accessibility": {"id": "accessibility", "title": "Accessibility", "score": accessibility},
            },
            "audits": {
                "first-contentful-paint": {
                    "id": "first-contentful-paint",
                    "score": 0.8,
                    "displayValue": fcp,
                },
                "speed-index": {"id": "speed-index", "score": 0.7},
            },
        },
    }


WORDPRESS_LOOKUP = [
    {
        "url": TEST_URL,
        "technologies": [
            {"slug": "nginx", "name": "Nginx", "categories": [{"id": 22, "slug": "web-servers", "name": "Web servers"}]},
            {"slug": "wordpress", "name": "WordPress", "categories": [{"id": 1, "slug": "cms", "name": "CMS"}]},
        ],
    }
]


class FakeUpstream:
    """
    Canned answers for the outbound APIs, keyed by "mobile", "desktop"
    (PageSpeed strategy) and "tech" (Wappalyzer). Every request is recorded.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responses: Dict[str, Any] = {
            "mobile": (200, build_pagespeed_payload(performance=0.42, seo=0.91, accessibility=0.78, fcp="3.1 s")),
            "desktop": (200, build_pagespeed_payload(performance=0.88, seo=0.91, accessibility=0.8, fcp="0.9 s")),
            "tech": (200, WORDPRESS_LOOKUP),
        }

    def answer(self, key: str, status_code: int = 200, body: Any = None):
        self.responses[key] = (status_code, body)

    def requests_for(self, key: str) -> List[httpx.Request]:
        return [request for request in self.requests if self._key(request) == key]

    @staticmethod
    def _key(request: httpx.Request) -> str:
        if request.url.host == "api.wappalyzer.com":
            return "tech"
        return request.url.params.get("strategy", "").lower()

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body = self.responses[self._key(request)]
        if isinstance(body, str):
            return httpx.Response(status_code, text=body)
        return httpx.Response(status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def pagespeed_payload():
    return build_pagespeed_payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        PAGESPEED_API_KEY="test-pagespeed-key",
        WAPPALYZER_API_KEY="test-wappalyzer-key",
        TECH_DETECTION_ENABLED=True,
        FORMS_ENDPOINT_URL=FORMS_URL,
        GREEN_BUNDLE_PRICE=99,
        CURRENCY_SYMBOL="£",
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def test_app(settings):
    """FastAPI application built around the test settings."""
    return create_app(settings)


@pytest.fixture
def client(test_app, settings, upstream) -> Generator[TestClient, None, None]:
    """
    TestClient whose analyzer talks to the FakeUpstream instead of the
    real APIs.
    """
    test_app.dependency_overrides[get_analyzer] = lambda: WebsiteAnalyzer(
        settings, transport=upstream.transport
    )
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()
