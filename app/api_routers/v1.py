from fastapi import APIRouter

from app.features.analysis.routes.check import router as check_router
from app.features.contact.routes.contact import router as contact_router
from app.features.pricing.routes.quote import router as quote_router

api_router = APIRouter()


# Register all feature routes
api_router.include_router(check_router)
api_router.include_router(quote_router)
api_router.include_router(contact_router)
