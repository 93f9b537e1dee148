from fastapi import APIRouter, Depends, status

from app.features.pricing.schemas.pricing import OfferSet, QuoteRequest
from app.features.pricing.services.offers import build_offers, combine_scores
from app.features.pricing.services.pricing import DEFAULT_PLATFORM
from app.platform.config import Settings
from app.platform.dependencies import get_app_settings
from app.platform.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["Pricing"])


@router.post("/quote", response_model=OfferSet, status_code=status.HTTP_200_OK)
async def quote(
    payload: QuoteRequest,
    settings: Settings = Depends(get_app_settings),
) -> OfferSet:
    """
    Offers for a set of scores, or for a full analysis result
    (mobile and desktop averaged per category).

    When no platform is given, the detected one is used, then WordPress.
    """
    if payload.scores is not None:
        scores = payload.scores
        platform = payload.platform or DEFAULT_PLATFORM
    else:
        scores = combine_scores(payload.analysis)
        platform = payload.platform or payload.analysis.platform or DEFAULT_PLATFORM

    offers = build_offers(
        scores,
        size=payload.size,
        platform=platform,
        green_bundle_price=settings.GREEN_BUNDLE_PRICE,
        currency_symbol=settings.CURRENCY_SYMBOL,
    )
    logger.info(
        f"Quote built: size={payload.size.value} platform={platform} "
        f"bundle={offers.bundle} offers={len(offers.offers)}"
    )
    return offers
