import pytest

from app.features.analysis.schemas.analysis import AnalysisResult, ScoreSet
from app.features.pricing.schemas.pricing import CUSTOM_QUOTE, ServiceCategory, Tier
from app.features.pricing.services.offers import (
    build_offers,
    build_service_offer,
    combine_scores,
    detect_bundle,
)
from app.features.pricing.services.pricing import DEFAULT_PLATFORM, platform_multiplier
from app.platform.config import Settings
from app.platform.exceptions import InputValidationError


def scores(performance, seo, accessibility):
    return ScoreSet(performance=performance, seo=seo, accessibility=accessibility)


class TestDetectBundle:
    def test_all_red(self):
        assert detect_bundle(scores(45, 40, 30)) == Tier.red

    def test_all_amber(self):
        assert detect_bundle(scores(55, 70, 89)) == Tier.amber

    def test_all_green(self):
        assert detect_bundle(scores(95, 92, 100)) == Tier.green

    def test_mixed(self):
        assert detect_bundle(scores(95, 60, 40)) is None

    def test_boundary_scores_split_tiers(self):
        assert detect_bundle(scores(49.9, 50, 40)) is None


class TestBuildOffers:
    @pytest.mark.parametrize(
        "size, size_multiplier",
        [("small", 1.0), ("medium", 1.5)],
    )
    @pytest.mark.parametrize("platform", ["WordPress", "Shopify"])
    def test_red_bundle(self, size, size_multiplier, platform):
        offer_set = build_offers(scores(45, 40, 30), size=size, platform=platform)

        assert offer_set.bundle is True
        assert len(offer_set.offers) == 1
        offer = offer_set.offers[0]
        assert offer.category == ServiceCategory.bundle
        assert offer.tier == Tier.red
        expected = 0.85 * (300 + 300 + 300) * size_multiplier * platform_multiplier(platform)
        # Prices are rounded to pennies
        assert offer.price == pytest.approx(expected, abs=0.01)

    def test_amber_bundle_is_ten_percent_off(self):
        offer_set = build_offers(scores(60, 70, 80), size="small", platform="WordPress")

        assert offer_set.bundle is True
        assert offer_set.offers[0].price == pytest.approx(0.9 * 450)

    @pytest.mark.parametrize("size", ["small", "medium", "large"])
    @pytest.mark.parametrize("platform", ["WordPress", "Wix"])
    def test_green_bundle_is_flat(self, size, platform):
        offer_set = build_offers(scores(95, 92, 100), size=size, platform=platform)

        assert offer_set.bundle is True
        assert offer_set.offers[0].tier == Tier.green
        assert offer_set.offers[0].price == 99
        assert offer_set.messages == []

    def test_green_bundle_price_is_configurable(self):
        offer_set = build_offers(scores(95, 92, 100), green_bundle_price=149)
        assert offer_set.offers[0].price == 149

    def test_large_red_bundle_is_a_custom_quote(self):
        offer = build_offers(scores(45, 40, 30), size="large").offers[0]

        assert offer.price == CUSTOM_QUOTE
        assert offer.display_price == "Custom Quote"

    def test_mixed_tiers_give_individual_offers(self):
        offer_set = build_offers(scores(95, 60, 40), size="small", platform="WordPress")

        assert offer_set.bundle is False
        by_category = {offer.category: offer for offer in offer_set.offers}
        assert set(by_category) == {ServiceCategory.seo, ServiceCategory.accessibility}

        assert by_category[ServiceCategory.seo].tier == Tier.amber
        assert by_category[ServiceCategory.seo].price == 150
        assert by_category[ServiceCategory.seo].name == "Amber Zone Audit: SEO"

        assert by_category[ServiceCategory.accessibility].tier == Tier.red
        assert by_category[ServiceCategory.accessibility].price == 300

        assert len(offer_set.messages) == 1
        assert "Performance" in offer_set.messages[0]

    def test_individual_offers_use_multipliers(self):
        offer_set = build_offers(scores(95, 60, 40), size="medium", platform="Shopify")
        prices = {offer.category: offer.price for offer in offer_set.offers}

        assert prices[ServiceCategory.seo] == pytest.approx(150 * 1.5 * 0.75)
        assert prices[ServiceCategory.accessibility] == pytest.approx(300 * 1.5 * 0.75)

    def test_individual_offers_on_large_site(self):
        offer_set = build_offers(scores(95, 60, 40), size="large")
        assert all(offer.price == CUSTOM_QUOTE for offer in offer_set.offers)

    def test_offers_carry_details_and_display_price(self):
        offer = build_offers(scores(95, 60, 40), size="small", platform="Other").offers[0]
        assert offer.details
        assert offer.display_price.startswith("£")

    def test_unknown_size_is_rejected(self):
        with pytest.raises(InputValidationError):
            build_offers(scores(45, 40, 30), size="enormous")


class TestBuildServiceOffer:
    def test_requested_category(self):
        offer = build_service_offer("accessibility", scores(95, 60, 40), size="small", platform="WordPress")
        assert offer.category == ServiceCategory.accessibility
        assert offer.price == 300

    def test_requested_bundle(self):
        offer = build_service_offer("bundle", scores(45, 40, 30))
        assert offer.category == ServiceCategory.bundle
        assert offer.price == pytest.approx(765)

    def test_bundle_requires_shared_tier(self):
        with pytest.raises(InputValidationError):
            build_service_offer("bundle", scores(95, 60, 40))

    def test_green_category_has_nothing_to_sell(self):
        with pytest.raises(InputValidationError):
            build_service_offer("performance", scores(95, 60, 40))

    def test_unknown_service(self):
        with pytest.raises(InputValidationError):
            build_service_offer("hosting", scores(95, 60, 40))


def test_combine_scores_averages_strategies():
    result = AnalysisResult.model_validate({
        "mobile": {"performance": 40, "seo": 90, "accessibility": 70, "firstContentfulPaint": "3 s"},
        "desktop": {"performance": 80, "seo": 100, "accessibility": 90, "firstContentfulPaint": "1 s"},
        "finalUrl": "https://example.com/",
    })

    combined = combine_scores(result)

    assert combined.performance == 60
    assert combined.seo == 95
    assert combined.accessibility == 80


def test_defaults_come_from_settings():
    offer = build_offers(scores(95, 92, 100)).offers[0]

    assert offer.price == Settings.model_fields["GREEN_BUNDLE_PRICE"].default
    assert offer.display_price.startswith(Settings.model_fields["CURRENCY_SYMBOL"].default)


def test_default_platform_is_priced_as_wordpress():
    assert DEFAULT_PLATFORM == "WordPress"
    assert build_offers(scores(95, 60, 40)) == build_offers(scores(95, 60, 40), platform="WordPress")
