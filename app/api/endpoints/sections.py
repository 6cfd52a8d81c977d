# app/api/endpoints/sections.py

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.api.endpoints.posts import validate_section_title

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{section_id}", response_model=schemas.Section)
def read_section(section_id: int, db: Session = Depends(deps.get_db)):
    try:
        section = crud.get_section(db, section_id=section_id)
        if section is None:
            raise HTTPException(status_code=404, detail="Section not found")
        return section
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching section {section_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{section_id}", response_model=schemas.Section)
def update_section(section_id: int, section: schemas.SectionUpdate, db: Session = Depends(deps.get_db)):
    if not section.type or not section.content:
        raise HTTPException(status_code=400, detail="Type and content are required")
    validate_section_title(section.title)
    try:
        db_section = crud.update_section(db, section_id=section_id, section=section)
        if db_section is None:
            raise HTTPException(status_code=404, detail="Section not found")
        return db_section
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating section {section_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{section_id}")
def delete_section(section_id: int, db: Session = Depends(deps.get_db)):
    try:
        success = crud.delete_section(db, section_id=section_id)
        if not success:
            raise HTTPException(status_code=404, detail="Section not found")
        return {"status": "success", "message": "Section deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting section {section_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
