from fastapi import Depends

from app.features.contact.services.contact_service import ContactRequestService
from app.platform.config import Settings
from app.platform.dependencies import get_app_settings


def get_contact_service(settings: Settings = Depends(get_app_settings)) -> ContactRequestService:
    return ContactRequestService(settings)
