from fastapi import APIRouter, Depends, status

from app.features.contact.dependencies.contact import get_contact_service
from app.features.contact.schemas.contact import ContactRequest
from app.features.contact.services.contact_service import ContactRequestService
from app.platform.response import api_response

router = APIRouter(tags=["Contact"])


@router.post("/contact-request", status_code=status.HTTP_201_CREATED)
async def submit_contact_request(
    request: ContactRequest,
    service: ContactRequestService = Depends(get_contact_service),
):
    """
    Contact request for a quoted service
    - Builds the requested offer from the visitor's scores
    - Relays details and offer to the forms service
    """
    submission = await service.submit(request)

    return api_response(
        message="Thank you! Your report and quote are on their way to your inbox.",
        data=submission.model_dump(by_alias=True),
        status_code=status.HTTP_201_CREATED,
    )
