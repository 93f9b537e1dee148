from fastapi import APIRouter, Depends, status

from app.features.analysis.dependencies.analyzer import get_analyzer
from app.features.analysis.schemas.analysis import AnalysisResult, AnalyzeRequest
from app.features.analysis.services.analyzer import WebsiteAnalyzer
from app.platform.exceptions import InputValidationError
from app.platform.logger import get_logger
from app.platform.utils.url_validator import validate_url

logger = get_logger(__name__)
router = APIRouter(tags=["Analysis"])


@router.post(
    "/check",
    response_model=AnalysisResult,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
@router.post(
    "/pagespeed",
    response_model=AnalysisResult,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    include_in_schema=False,
)
async def check_website(
    payload: AnalyzeRequest,
    analyzer: WebsiteAnalyzer = Depends(get_analyzer),
) -> AnalysisResult:
    """
    Mobile and desktop scores for one URL.
    Any failure is returned as {"error": "..."}; scores are never partial.
    """
    is_valid, url, error = validate_url(payload.url)
    if not is_valid:
        raise InputValidationError(error)

    logger.info(f"Starting website check for URL: {url}")
    return await analyzer.analyze(url)
