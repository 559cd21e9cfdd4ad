"""
Error taxonomy shared by the microservices and its mapping to HTTP responses.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Process-fatal configuration problem, raised before the service starts."""


class ServiceError(Exception):
    default_detail = "Internal server error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class MalformedInput(ServiceError):
    default_detail = "Invalid JSON payload"


class AuthenticationFailure(ServiceError):
    default_detail = "Account does not exist / Invalid credentials"


class NotFound(ServiceError):
    default_detail = "Not found"


class Conflict(ServiceError):
    default_detail = "Username already exists"


class StoreError(ServiceError):
    pass


class IssuanceError(ServiceError):
    default_detail = "Error generating JWT token"


STATUS_CODES = {
    MalformedInput: status.HTTP_400_BAD_REQUEST,
    AuthenticationFailure: status.HTTP_401_UNAUTHORIZED,
    NotFound: status.HTTP_404_NOT_FOUND,
    Conflict: status.HTTP_409_CONFLICT,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    IssuanceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: ServiceError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=status_for(exc), content={"detail": exc.detail})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    in_body = any(err.get("loc", ("",))[0] == "body" for err in exc.errors())
    detail = MalformedInput.default_detail if in_body else "Invalid request parameters"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
