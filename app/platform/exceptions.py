from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.platform.logger import get_logger
from app.platform.response import error_response

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred."


class HealthCheckError(Exception):
    """
    Base for every failure the API reports on purpose.

    `expose` decides whether the message reaches the caller or is replaced
    by `public_message`; the full message is always logged.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = GENERIC_ERROR_MESSAGE
    expose = False

    def __init__(self, message: str = ""):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message

    @property
    def detail(self) -> str:
        return self.message if self.expose else self.public_message


class InputValidationError(HealthCheckError):
    status_code = status.HTTP_400_BAD_REQUEST
    public_message = "Invalid request."
    expose = True


class ConfigurationError(HealthCheckError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = "Service is not configured."
    expose = True


class UpstreamError(HealthCheckError):
    """An outbound call failed or answered with something unusable."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = "Failed to analyze the website."


class ExtractionError(UpstreamError):
    """A PageSpeed payload is missing a field the scores depend on."""


class FormRelayError(UpstreamError):
    """The forms service could not be reached or failed without a reason."""

    public_message = "Oops! There was a problem submitting your form"


class FormSubmissionError(HealthCheckError):
    """The forms service rejected the submission and said why."""

    status_code = status.HTTP_400_BAD_REQUEST
    public_message = FormRelayError.public_message
    expose = True


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return InputValidationError.public_message
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def add_exception_handlers(app: FastAPI):
    @app.exception_handler(HealthCheckError)
    async def health_check_error_handler(request: Request, exc: HealthCheckError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        else:
            logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return error_response(exc.detail, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(str(exc.detail) or "Error", status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.warning(f"Request validation failed on {request.url.path}: {message}")
        return error_response(message, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.url.path}: {exc}")
        return error_response(
            GENERIC_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
