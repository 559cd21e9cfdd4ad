"""
Event logger utility for authentication events.
"""
from datetime import datetime
from typing import Optional
import logging

from fastapi import Request

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "login_success",
    "login_failure",
}


def client_ip(request: Request) -> Optional[str]:
    ip_address = None
    if request.client:
        ip_address = request.client.host

    # X-Forwarded-For can contain multiple IPs, take the first one
    if not ip_address and request.headers.get("x-forwarded-for"):
        ip_address = request.headers.get("x-forwarded-for").split(",")[0].strip()

    return ip_address


def log_auth_event(
    event_type: str,
    username: str,
    request: Request,
    account_id: Optional[int] = None
) -> None:
    """
    Log an authentication event.

    Args:
        event_type: One of: login_success, login_failure
        username: Username submitted with the request
        request: FastAPI Request object
        account_id: ID of the matched account, if any

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    logger.info(
        "AUTH %s user_id=%s username=%s ip=%s user_agent=%s timestamp=%s",
        event_type, account_id, username, client_ip(request),
        request.headers.get("user-agent"), datetime.utcnow().isoformat()
    )
