from app.features.analysis.schemas.analysis import clamp_score
from app.features.pricing.schemas.pricing import SeverityTier, Tier

AMBER_THRESHOLD = 50
GREEN_THRESHOLD = 90

SEVERITY_TIERS = {
    Tier.red: SeverityTier(
        tier=Tier.red,
        name="Red Zone Rescue",
        base_price=300,
        problem_text=(
            "Your site is in the red. It is likely losing visitors, customers "
            "and search ranking right now."
        ),
    ),
    Tier.amber: SeverityTier(
        tier=Tier.amber,
        name="Amber Zone Audit",
        base_price=150,
        problem_text=(
            "Your site works, but there is clear room for improvement that "
            "visitors and search engines will notice."
        ),
    ),
    Tier.green: SeverityTier(
        tier=Tier.green,
        name="Green Zone Polish",
        base_price=75,
        problem_text="Your site is in great shape. A light polish keeps it there.",
    ),
}


def tier_for(score: float) -> Tier:
    score = clamp_score(score)
    if score < AMBER_THRESHOLD:
        return Tier.red
    if score < GREEN_THRESHOLD:
        return Tier.amber
    return Tier.green


def severity(score: float) -> SeverityTier:
    """[0, 50) Red, [50, 90) Amber, [90, 100] Green."""
    return SEVERITY_TIERS[tier_for(score)]
