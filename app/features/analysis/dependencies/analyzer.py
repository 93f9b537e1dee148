from fastapi import Depends

from app.features.analysis.services.analyzer import WebsiteAnalyzer
from app.platform.config import Settings
from app.platform.dependencies import get_app_settings


def get_analyzer(settings: Settings = Depends(get_app_settings)) -> WebsiteAnalyzer:
    return WebsiteAnalyzer(settings)
