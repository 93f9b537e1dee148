from typing import Dict, List, Optional, Union

from app.features.analysis.schemas.analysis import AnalysisResult, ScoreSet
from app.features.pricing.schemas.pricing import (
    SCORED_CATEGORIES,
    OfferSet,
    Price,
    ServiceCategory,
    ServiceOffer,
    SiteSize,
    Tier,
)
from app.features.pricing.services.pricing import (
    DEFAULT_CURRENCY_SYMBOL,
    DEFAULT_PLATFORM,
    apply_discount,
    calculate_price,
    format_price,
    parse_size,
)
from app.features.pricing.services.severity import SEVERITY_TIERS, severity
from app.platform.config import Settings
from app.platform.exceptions import InputValidationError

DEFAULT_GREEN_BUNDLE_PRICE = Settings.model_fields["GREEN_BUNDLE_PRICE"].default

BUNDLE_DISCOUNTS = {
    Tier.red: 0.15,
    Tier.amber: 0.10,
}

BUNDLE_NAMES = {
    Tier.red: "Red Zone Complete Rescue Bundle",
    Tier.amber: "Amber Zone Full Audit Bundle",
    Tier.green: "Green Zone Polish Bundle",
}

CATEGORY_LABELS = {
    ServiceCategory.performance: "Performance",
    ServiceCategory.seo: "SEO",
    ServiceCategory.accessibility: "Accessibility",
}

OFFER_DETAILS: Dict[ServiceCategory, Dict[Tier, List[str]]] = {
    ServiceCategory.performance: {
        Tier.red: [
            "Advanced code minification and deferral of non-critical scripts.",
            "Full image optimisation, with automatic optimisation for new uploads.",
            "Caching set up and tuned for your hosting.",
            "In-depth database and server response optimisation.",
        ],
        Tier.amber: [
            "Install and configure a caching layer.",
            "Optimise existing images and set up automatic optimisation.",
            "Basic cleanup of unused scripts and plugins.",
        ],
    },
    ServiceCategory.seo: {
        Tier.red: [
            "Fix missing or duplicate titles and meta descriptions.",
            "Repair crawl blockers, broken links and canonical tags.",
            "Set up structured data and an XML sitemap.",
        ],
        Tier.amber: [
            "Tidy up titles, meta descriptions and heading structure.",
            "Check indexing, sitemap and robots rules.",
        ],
    },
    ServiceCategory.accessibility: {
        Tier.red: [
            "Add missing alt text, form labels and button names.",
            "Fix colour contrast failures across the site.",
            "Make navigation usable by keyboard and screen readers.",
        ],
        Tier.amber: [
            "Fix contrast and labelling issues flagged by the audit.",
            "Review headings and landmarks for screen readers.",
        ],
    },
}

GREEN_BUNDLE_DETAILS = [
    "A final review of performance, SEO and accessibility.",
    "A short report of small wins to keep your scores in the green.",
]


def category_scores(scores: ScoreSet) -> Dict[ServiceCategory, float]:
    return {category: getattr(scores, category.value) for category in SCORED_CATEGORIES}


def combine_scores(result: AnalysisResult) -> ScoreSet:
    """Per-category mean of the mobile and desktop scores."""
    return ScoreSet(
        performance=(result.mobile.performance + result.desktop.performance) / 2,
        seo=(result.mobile.seo + result.desktop.seo) / 2,
        accessibility=(result.mobile.accessibility + result.desktop.accessibility) / 2,
    )


def detect_bundle(scores: ScoreSet) -> Optional[Tier]:
    """The shared tier when all three scores land in the same one, else None."""
    tiers = {severity(score).tier for score in category_scores(scores).values()}
    if len(tiers) == 1:
        return tiers.pop()
    return None


def bundle_price(
    tier: Tier,
    size: Union[SiteSize, str],
    platform: Optional[str],
    green_bundle_price: float = DEFAULT_GREEN_BUNDLE_PRICE,
) -> Price:
    if tier == Tier.green:
        # Flat price; size and platform do not apply
        return green_bundle_price

    summed_base = SEVERITY_TIERS[tier].base_price * len(SCORED_CATEGORIES)
    return apply_discount(calculate_price(summed_base, size, platform), BUNDLE_DISCOUNTS[tier])


def build_bundle_offer(
    tier: Tier,
    size: Union[SiteSize, str],
    platform: Optional[str],
    green_bundle_price: float = DEFAULT_GREEN_BUNDLE_PRICE,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> ServiceOffer:
    price = bundle_price(tier, size, platform, green_bundle_price)

    if tier == Tier.green:
        details = list(GREEN_BUNDLE_DETAILS)
    else:
        details = [SEVERITY_TIERS[tier].problem_text]
        for category in SCORED_CATEGORIES:
            details.extend(OFFER_DETAILS[category][tier])
        details.append(f"{int(BUNDLE_DISCOUNTS[tier] * 100)}% off compared to booking each service separately.")

    return ServiceOffer(
        name=BUNDLE_NAMES[tier],
        price=price,
        display_price=format_price(price, currency_symbol),
        details=details,
        category=ServiceCategory.bundle,
        tier=tier,
    )


def build_category_offer(
    category: ServiceCategory,
    score: float,
    size: Union[SiteSize, str],
    platform: Optional[str],
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> Optional[ServiceOffer]:
    """One offer for a Red or Amber score; None for a Green score."""
    level = severity(score)
    if level.tier == Tier.green:
        return None

    price = calculate_price(level.base_price, size, platform)
    return ServiceOffer(
        name=f"{level.name}: {CATEGORY_LABELS[category]}",
        price=price,
        display_price=format_price(price, currency_symbol),
        details=[level.problem_text, *OFFER_DETAILS[category][level.tier]],
        category=category,
        tier=level.tier,
    )


def congratulation(category: ServiceCategory) -> str:
    return f"Great job! Your {CATEGORY_LABELS[category]} score is already in the green."


def build_offers(
    scores: ScoreSet,
    size: Union[SiteSize, str] = SiteSize.small,
    platform: Optional[str] = DEFAULT_PLATFORM,
    green_bundle_price: float = DEFAULT_GREEN_BUNDLE_PRICE,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> OfferSet:
    """
    A bundle when all three scores share a tier, otherwise one offer per
    Red or Amber score and a congratulation per Green score.
    """
    size = parse_size(size)

    bundle_tier = detect_bundle(scores)
    if bundle_tier is not None:
        offer = build_bundle_offer(bundle_tier, size, platform, green_bundle_price, currency_symbol)
        return OfferSet(offers=[offer], bundle=True)

    offer_set = OfferSet()
    for category, score in category_scores(scores).items():
        offer = build_category_offer(category, score, size, platform, currency_symbol)
        if offer is None:
            offer_set.messages.append(congratulation(category))
        else:
            offer_set.offers.append(offer)
    return offer_set


def build_service_offer(
    service: Union[ServiceCategory, str],
    scores: ScoreSet,
    size: Union[SiteSize, str] = SiteSize.small,
    platform: Optional[str] = DEFAULT_PLATFORM,
    green_bundle_price: float = DEFAULT_GREEN_BUNDLE_PRICE,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> ServiceOffer:
    """The single offer a user asked about, e.g. to attach to a contact request."""
    try:
        service = ServiceCategory(service)
    except ValueError:
        raise InputValidationError(f"Unknown service: {service}")
    size = parse_size(size)

    if service == ServiceCategory.bundle:
        bundle_tier = detect_bundle(scores)
        if bundle_tier is None:
            raise InputValidationError("A bundle is only available when all three scores share a tier")
        return build_bundle_offer(bundle_tier, size, platform, green_bundle_price, currency_symbol)

    offer = build_category_offer(
        service, category_scores(scores)[service], size, platform, currency_symbol
    )
    if offer is None:
        raise InputValidationError(
            f"No {CATEGORY_LABELS[service]} service is needed: the score is already in the green"
        )
    return offer
