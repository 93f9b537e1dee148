from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from app.features.analysis.services.score_extractor import round_score
from app.features.contact.schemas.contact import ContactRequest, ContactSubmission
from app.features.pricing.schemas.pricing import ServiceOffer
from app.features.pricing.services.offers import build_service_offer
from app.features.pricing.services.pricing import DEFAULT_PLATFORM
from app.platform.config import Settings
from app.platform.exceptions import (
    ConfigurationError,
    FormRelayError,
    FormSubmissionError,
    InputValidationError,
)
from app.platform.logger import get_logger
from app.platform.utils.url_validator import validate_url

logger = get_logger(__name__)


class ContactRequestService:
    """
    Builds the offer a visitor asked about and relays it, with their
    details, to the forms service (Formspree compatible).
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.transport = transport

    def build_offer(self, request: ContactRequest) -> ServiceOffer:
        return build_service_offer(
            request.service,
            request.scores,
            size=request.size,
            platform=request.platform or DEFAULT_PLATFORM,
            green_bundle_price=self.settings.GREEN_BUNDLE_PRICE,
            currency_symbol=self.settings.CURRENCY_SYMBOL,
        )

    @staticmethod
    def build_payload(request: ContactRequest, url: str, offer: ServiceOffer) -> Dict[str, Any]:
        payload = {
            "name": request.name,
            "email": request.email,
            "url": url,
            "platform": request.platform or DEFAULT_PLATFORM,
            "size": request.size.value,
            "service": request.service.value,
            "offer_name": offer.name,
            # Display string, so a custom quote never reaches the form as a number
            "offer_price": offer.display_price,
            "performance_score": round_score(request.scores.performance),
            "seo_score": round_score(request.scores.seo),
            "accessibility_score": round_score(request.scores.accessibility),
            "submittedAt": datetime.now(timezone.utc).isoformat(),
        }
        if request.message:
            payload["message"] = request.message
        return payload

    async def submit(self, request: ContactRequest) -> ContactSubmission:
        if not self.settings.FORMS_ENDPOINT_URL:
            raise ConfigurationError("Contact form endpoint is not configured")

        is_valid, url, error = validate_url(request.url)
        if not is_valid:
            raise InputValidationError(error)

        offer = self.build_offer(request)
        payload = self.build_payload(request, url, offer)

        try:
            async with httpx.AsyncClient(
                timeout=self.settings.FORMS_TIMEOUT_SECONDS,
                transport=self.transport,
            ) as client:
                response = await client.post(
                    self.settings.FORMS_ENDPOINT_URL,
                    json=payload,
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as e:
            raise FormRelayError(f"Forms service request failed: {type(e).__name__}") from e

        if response.is_error:
            self._raise_for_form_errors(response)

        logger.info(
            f"Contact request relayed: url={url} service={request.service.value} "
            f"offer={offer.name} price={offer.display_price}"
        )
        return ContactSubmission(url=url, offer=offer)

    @staticmethod
    def _raise_for_form_errors(response: httpx.Response) -> None:
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and isinstance(data.get("errors"), list):
            messages = [
                str(error.get("message"))
                for error in data["errors"]
                if isinstance(error, dict) and error.get("message")
            ]
            if messages:
                raise FormSubmissionError(", ".join(messages))

        logger.error(
            f"Forms service returned {response.status_code}: {response.text[:500]}"
        )
        raise FormRelayError(f"Forms service returned {response.status_code}")
