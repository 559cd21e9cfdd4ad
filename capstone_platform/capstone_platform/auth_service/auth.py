from datetime import datetime, timedelta
from typing import Optional
import logging

import jwt
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..common.config import AuthSettings
from ..common.errors import AuthenticationFailure, IssuanceError, StoreError
from ..common.models import Account
from ..common.security import hash_password

logger = logging.getLogger(__name__)


def create_access_token(username: str, settings: AuthSettings, now: Optional[datetime] = None) -> str:
    """
    Issue a signed token carrying the username, valid for
    ``settings.ACCESS_TOKEN_EXPIRE_MINUTES`` minutes.

    Raises:
        IssuanceError: If the token cannot be signed
    """
    issued_at = now or datetime.utcnow()
    expire = issued_at + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"username": username, "iat": issued_at, "exp": expire}
    try:
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    except (jwt.PyJWTError, TypeError, ValueError, NotImplementedError) as e:
        logger.error(f"Failed to sign token for {username}: {e}")
        raise IssuanceError() from e


def decode_access_token(token: str, settings: AuthSettings) -> dict:
    """
    Verify a token's signature and expiry and return its claims.

    Raises:
        jwt.InvalidTokenError: ExpiredSignatureError once the token has expired,
            another subclass for a bad signature or malformed token
    """
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        options={"require": ["exp", "username"]},
    )


def authenticate(db: Session, username: str, password: str) -> Account:
    """
    Look up the live account matching the username and password digest.

    Raises:
        AuthenticationFailure: If no such account exists
        StoreError: If the lookup itself fails
    """
    digest = hash_password(password)
    try:
        account = (
            db.query(Account)
            .filter(
                Account.username == username,
                Account.password == digest,
                Account.is_deleted.is_(False),
            )
            .first()
        )
    except SQLAlchemyError as e:
        logger.error(f"Failed to look up account {username}: {e}", exc_info=True)
        raise StoreError() from e

    if account is None:
        raise AuthenticationFailure()
    return account
