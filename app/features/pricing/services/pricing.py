from typing import Optional, Union

from app.features.pricing.schemas.pricing import CUSTOM_QUOTE, Price, SiteSize
from app.platform.config import Settings
from app.platform.exceptions import InputValidationError

SIZE_MULTIPLIERS = {
    SiteSize.small: 1.0,
    SiteSize.medium: 1.5,
    # SiteSize.large has no multiplier: it is always a custom quote
}

WORDPRESS = "wordpress"
DEFAULT_PLATFORM = "WordPress"
DEFAULT_CURRENCY_SYMBOL = Settings.model_fields["CURRENCY_SYMBOL"].default
WORDPRESS_MULTIPLIER = 1.0
OTHER_PLATFORM_MULTIPLIER = 0.75


def is_custom_quote(price: Price) -> bool:
    return isinstance(price, str) and price == CUSTOM_QUOTE


def parse_size(size: Union[SiteSize, str]) -> SiteSize:
    try:
        return SiteSize(size)
    except ValueError:
        raise InputValidationError(
            f"Unknown site size: {size} (must be small, medium or large)"
        )


def platform_multiplier(platform: Optional[str]) -> float:
    if platform and platform.strip().lower() == WORDPRESS:
        return WORDPRESS_MULTIPLIER
    return OTHER_PLATFORM_MULTIPLIER


def calculate_price(
    base_price: float,
    size: Union[SiteSize, str],
    platform: Optional[str],
) -> Price:
    """
    base_price x size multiplier x platform multiplier.

    A large site never gets a number; CUSTOM_QUOTE is returned instead and
    must be special-cased by anything that formats or sums prices.
    """
    size = parse_size(size)
    if size == SiteSize.large:
        return CUSTOM_QUOTE

    return round(base_price * SIZE_MULTIPLIERS[size] * platform_multiplier(platform), 2)


def apply_discount(price: Price, discount: float) -> Price:
    if is_custom_quote(price):
        return price
    return round(price * (1 - discount), 2)


def format_price(price: Price, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    if is_custom_quote(price):
        return "Custom Quote"
    if float(price).is_integer():
        return f"{currency_symbol}{int(price)}"
    return f"{currency_symbol}{price:.2f}"
