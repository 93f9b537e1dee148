import math
from typing import Any, Dict

from pydantic import ValidationError

from app.features.analysis.schemas.analysis import StrategyScores
from app.features.analysis.schemas.upstream import PageSpeedPayload
from app.platform.exceptions import ExtractionError


def _describe_missing(exc: ValidationError) -> str:
    fields = []
    for error in exc.errors():
        fields.append(".".join(str(part) for part in error.get("loc", ())))
    return ", ".join(fields) or "unknown field"


def parse_payload(payload: Dict[str, Any]) -> PageSpeedPayload:
    """
    Validate a raw PageSpeed response.

    Raises:
        ExtractionError: if a category, its score, the first-contentful-paint
            audit or the report id is missing. Absent data is never
            replaced with a default.
    """
    try:
        return PageSpeedPayload.model_validate(payload)
    except ValidationError as exc:
        raise ExtractionError(
            f"PageSpeed payload is missing required data: {_describe_missing(exc)}"
        ) from exc


def extract_scores(payload: Dict[str, Any]) -> StrategyScores:
    """Turn one strategy's PageSpeed payload into 0-100 scores."""
    report = parse_payload(payload).lighthouse_result
    categories = report.categories

    return StrategyScores(
        performance=categories.performance.score * 100,
        seo=categories.seo.score * 100,
        accessibility=categories.accessibility.score * 100,
        first_contentful_paint=report.audits.first_contentful_paint.display_value,
    )


def final_url(payload: Dict[str, Any]) -> str:
    return parse_payload(payload).id


def round_score(value: float) -> int:
    # Half-up, the way the scores are displayed (0.5 -> 1, 89.5 -> 90)
    return int(math.floor(value + 0.5))
