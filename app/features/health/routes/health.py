from fastapi import APIRouter, Depends, status

from app.platform.config import Settings
from app.platform.dependencies import get_app_settings
from app.platform.response import api_response


router = APIRouter()

@router.get("/health", tags=["health"])
async def health_check(settings: Settings = Depends(get_app_settings)):
    # Only whether each integration is configured, never the keys
    return api_response(
        data={
            "status": "ok",
            "service": settings.APP_NAME,
            "integrations": {
                "pagespeed": bool(settings.PAGESPEED_API_KEY),
                "tech_detection": settings.TECH_DETECTION_ENABLED and bool(settings.WAPPALYZER_API_KEY),
                "contact_form": bool(settings.FORMS_ENDPOINT_URL),
            },
        },
        message="Service is healthy",
        status_code=status.HTTP_200_OK,
    )
