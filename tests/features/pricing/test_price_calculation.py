import pytest

from app.features.pricing.schemas.pricing import CUSTOM_QUOTE, SiteSize
from app.features.pricing.services.pricing import (
    apply_discount,
    calculate_price,
    format_price,
    is_custom_quote,
    platform_multiplier,
)
from app.platform.exceptions import InputValidationError


class TestCalculatePrice:
    def test_medium_wordpress(self):
        assert calculate_price(150, size="medium", platform="WordPress") == 225

    def test_small_other_platform(self):
        assert calculate_price(150, size="small", platform="Other") == 112.5

    def test_small_wordpress_is_the_base_price(self):
        assert calculate_price(300, SiteSize.small, "WordPress") == 300

    @pytest.mark.parametrize("base_price", [75, 150, 300, 900])
    @pytest.mark.parametrize("platform", ["WordPress", "Shopify", None])
    def test_large_is_always_a_custom_quote(self, base_price, platform):
        price = calculate_price(base_price, size="large", platform=platform)
        assert price == CUSTOM_QUOTE
        assert not isinstance(price, (int, float))

    def test_unknown_size(self):
        with pytest.raises(InputValidationError):
            calculate_price(150, size="huge", platform="WordPress")


class TestPlatformMultiplier:
    @pytest.mark.parametrize("platform", ["WordPress", "wordpress", " WORDPRESS "])
    def test_wordpress(self, platform):
        assert platform_multiplier(platform) == 1.0

    @pytest.mark.parametrize("platform", ["Shopify", "Wix", "Squarespace", "", None])
    def test_everything_else(self, platform):
        assert platform_multiplier(platform) == 0.75


class TestCustomQuoteSentinel:
    def test_discount_leaves_sentinel_untouched(self):
        assert apply_discount(CUSTOM_QUOTE, 0.15) == CUSTOM_QUOTE

    def test_discount_on_number(self):
        assert apply_discount(900, 0.15) == pytest.approx(765)

    def test_is_custom_quote(self):
        assert is_custom_quote(CUSTOM_QUOTE)
        assert not is_custom_quote(0)
        assert not is_custom_quote(225.0)


class TestFormatPrice:
    def test_custom_quote(self):
        assert format_price(CUSTOM_QUOTE) == "Custom Quote"

    def test_whole_amount(self):
        assert format_price(225.0) == "£225"

    def test_fractional_amount(self):
        assert format_price(112.5) == "£112.50"

    def test_currency_symbol(self):
        assert format_price(99, currency_symbol="$") == "$99"
