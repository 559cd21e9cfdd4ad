"""
Capstone entry record endpoints.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy import and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...common.clock import creation_stamp
from ...common.db import get_db
from ...common.errors import NotFound, StoreError
from ...common.models import Record
from ...common.schemas import RecordCreate, RecordOut, RecordUpdate

router = APIRouter(prefix="/api/records", tags=["records"])
logger = logging.getLogger(__name__)


def get_live_record(db: Session, record_id: int) -> Record:
    record = (
        db.query(Record)
        .filter(Record.id == record_id, Record.is_deleted.is_(False))
        .first()
    )
    if record is None:
        raise NotFound(f"Record {record_id} does not exist")
    return record


@router.post("", response_model=RecordOut, status_code=status.HTTP_202_ACCEPTED)
def create_record(payload: RecordCreate, request: Request, db: Session = Depends(get_db)):
    logger.info("Entering endpoint to add new capstone entry record")
    settings = request.app.state.settings

    record = Record(
        **payload.model_dump(),
        creation_date=creation_stamp(settings.TIMEZONE),
        is_deleted=False,
    )
    try:
        db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error creating new capstone record: {e}", exc_info=True)
        raise StoreError("Error creating new capstone record") from e

    logger.info(f"Created record: id={record.id}, account_id={record.account_id}")
    return record


@router.get("", response_model=List[RecordOut], status_code=status.HTTP_202_ACCEPTED)
def read_records(
    ay: Optional[str] = Query(None, description="Exact academic year"),
    title: Optional[str] = Query(None, description="Substring of the title"),
    db: Session = Depends(get_db)
):
    """
    List live records, optionally filtered by academic year and title.

    Empty filter values are treated as absent.
    """
    logger.info("Entering endpoint to query all capstone entries")

    filters = [Record.is_deleted.is_(False)]
    if ay:
        filters.append(Record.acad_year == ay)
    if title:
        filters.append(Record.title.contains(title, autoescape=True))

    try:
        records = db.query(Record).filter(and_(*filters)).order_by(Record.id).all()
    except SQLAlchemyError as e:
        logger.error(f"Error iterating over rows: {e}", exc_info=True)
        raise StoreError("Error iterating over rows") from e

    logger.info(f"Records query successful: returned={len(records)}, filters=(ay={ay}, title={title})")
    return records


@router.put("/{record_id}", response_model=RecordOut, status_code=status.HTTP_202_ACCEPTED)
def update_record(record_id: int, payload: RecordUpdate, db: Session = Depends(get_db)):
    logger.info("Entering endpoint to update a capstone entry record")
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    try:
        record = get_live_record(db, record_id)
        for field, value in changes.items():
            setattr(record, field, value)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error updating record {record_id}: {e}", exc_info=True)
        raise StoreError("Error updating capstone record") from e

    logger.info(f"Updated record: id={record.id}, fields={sorted(changes)}")
    return record


@router.delete("/{record_id}", response_model=RecordOut, status_code=status.HTTP_202_ACCEPTED)
def delete_record(record_id: int, db: Session = Depends(get_db)):
    logger.info("Entering endpoint to (soft) delete a capstone entry record")
    try:
        record = get_live_record(db, record_id)
        record.is_deleted = True
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error deleting record {record_id}: {e}", exc_info=True)
        raise StoreError("Error deleting capstone record") from e

    logger.info(f"Soft deleted record: id={record.id}")
    return record
