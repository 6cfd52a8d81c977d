# app/crud/crud_section.py

import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from app import models, schemas

logger = logging.getLogger(__name__)


def get_section(db: Session, section_id: int) -> Optional[models.Section]:
    return db.query(models.Section).filter(models.Section.id == section_id).first()


def update_section(db: Session, section_id: int, section: schemas.SectionUpdate) -> Optional[models.Section]:
    """
    Replace a section's type, content, metadata and order.

    order falls back to 0 when not given; title is only replaced when it is
    part of the payload.
    """
    db_section = get_section(db, section_id)
    if db_section is None:
        logger.warning(f"Section with id {section_id} not found")
        return None

    db_section.type = section.type
    db_section.content = section.content
    db_section.section_metadata = section.metadata
    db_section.order = section.order if section.order is not None else 0
    if "title" in section.model_fields_set:
        db_section.title = section.title or None
    db_section.updated_at = func.now()
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_section)
    logger.info(f"Section {section_id} updated")
    return db_section


def delete_section(db: Session, section_id: int) -> bool:
    db_section = get_section(db, section_id)
    if db_section is None:
        logger.warning(f"Section with id {section_id} not found")
        return False
    try:
        db.delete(db_section)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Section {section_id} deleted")
    return True
