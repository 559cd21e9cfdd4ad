"""
Login endpoint of the auth microservice.
"""
import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from ...common.db import get_db
from ...common.errors import AuthenticationFailure
from ...common.schemas import AccountOut, Credentials
from ..auth import authenticate, create_access_token
from ..utils.event_logger import log_auth_event

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("", response_model=AccountOut, status_code=status.HTTP_202_ACCEPTED)
def login(credentials: Credentials, request: Request, response: Response, db: Session = Depends(get_db)):
    """
    Check the submitted credentials and establish a session cookie.

    The token is only attached once it has been issued, so a signing failure
    leaves the response without a cookie.
    """
    logger.info("Entering endpoint to log in to an account")
    settings = request.app.state.settings

    try:
        account = authenticate(db, credentials.username, credentials.password)
    except AuthenticationFailure:
        log_auth_event("login_failure", credentials.username, request)
        raise

    token = create_access_token(account.username, settings)
    response.set_cookie(key=settings.COOKIE_NAME, value=token, httponly=True)

    log_auth_event("login_success", account.username, request, account.id)
    return account
