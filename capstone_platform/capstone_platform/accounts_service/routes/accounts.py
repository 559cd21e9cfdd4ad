"""
Account registration and maintenance endpoints.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...common.clock import creation_stamp
from ...common.db import get_db
from ...common.errors import Conflict, NotFound, StoreError
from ...common.models import Account
from ...common.schemas import AccountCreate, AccountOut, AccountPublic, AccountUpdate
from ...common.security import hash_password

router = APIRouter(prefix="/api/accounts", tags=["accounts"])
logger = logging.getLogger(__name__)


def username_taken(db: Session, username: str, exclude_id: int = None) -> bool:
    """Soft-deleted accounts still hold their username."""
    query = db.query(Account.id).filter(Account.username == username)
    if exclude_id is not None:
        query = query.filter(Account.id != exclude_id)
    return query.first() is not None


def get_live_account(db: Session, account_id: int) -> Account:
    account = (
        db.query(Account)
        .filter(Account.id == account_id, Account.is_deleted.is_(False))
        .first()
    )
    if account is None:
        raise NotFound(f"Account {account_id} does not exist")
    return account


@router.post("", response_model=AccountOut, status_code=status.HTTP_202_ACCEPTED)
def create_account(payload: AccountCreate, request: Request, db: Session = Depends(get_db)):
    logger.info("Entering endpoint to add new account")
    settings = request.app.state.settings

    try:
        if username_taken(db, payload.username):
            raise Conflict()
    except SQLAlchemyError as e:
        logger.error(f"Error checking existing user {payload.username}: {e}", exc_info=True)
        raise StoreError("Error checking existing user") from e

    account = Account(
        name=payload.name,
        username=payload.username,
        password=hash_password(payload.password),
        role=payload.role,
        creation_date=creation_stamp(settings.TIMEZONE),
        is_approved=False,
        is_deleted=False,
    )
    try:
        db.add(account)
        db.commit()
        db.refresh(account)
    except IntegrityError as e:
        # A concurrent registration claimed the username between check and insert
        db.rollback()
        logger.info(f"Username {payload.username} claimed concurrently: {e}")
        raise Conflict() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating new account {payload.username}: {e}", exc_info=True)
        raise StoreError("Error creating new account") from e

    logger.info(f"Created account: id={account.id}, username={account.username}")
    return account


@router.get("", response_model=List[AccountPublic], status_code=status.HTTP_202_ACCEPTED)
def read_accounts(db: Session = Depends(get_db)):
    logger.info("Entering endpoint to query all accounts")
    try:
        return db.query(Account).filter(Account.is_deleted.is_(False)).order_by(Account.id).all()
    except SQLAlchemyError as e:
        logger.error(f"Error querying accounts: {e}", exc_info=True)
        raise StoreError("Error querying accounts") from e


@router.put("/{account_id}", response_model=AccountOut, status_code=status.HTTP_202_ACCEPTED)
def update_account(account_id: int, payload: AccountUpdate, db: Session = Depends(get_db)):
    logger.info("Entering endpoint to update an account's information")
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    try:
        account = get_live_account(db, account_id)
        if "username" in changes and username_taken(db, changes["username"], exclude_id=account_id):
            raise Conflict()
        if "password" in changes:
            changes["password"] = hash_password(changes["password"])
        for field, value in changes.items():
            setattr(account, field, value)
        db.commit()
        db.refresh(account)
    except IntegrityError as e:
        db.rollback()
        raise Conflict() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating account {account_id}: {e}", exc_info=True)
        raise StoreError("Error updating account") from e

    logger.info(f"Updated account: id={account.id}, fields={sorted(changes)}")
    return account


@router.delete("/{account_id}", response_model=AccountOut, status_code=status.HTTP_202_ACCEPTED)
def delete_account(account_id: int, db: Session = Depends(get_db)):
    logger.info("Entering endpoint to (soft) delete an account")
    try:
        account = get_live_account(db, account_id)
        account.is_deleted = True
        db.commit()
        db.refresh(account)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting account {account_id}: {e}", exc_info=True)
        raise StoreError("Error deleting account") from e

    logger.info(f"Soft deleted account: id={account.id}, username={account.username}")
    return account
