from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from course_search.config import settings
from course_search.database import get_db
from course_search.exceptions import TermNotFoundError
from course_search.search.catalog import list_requirements_for_term, list_terms

import logging
logger = logging.getLogger("course_search.catalog")


router = APIRouter(tags=["Catalog"])


@router.get("/terms")
def get_terms(db: Session = Depends(get_db)):
    rows = list_terms(db)
    return {"terms": [{"code": t.code, "name": t.name} for t in rows]}


# for the GE filter checkboxes: only requirements that exist in the term
@router.get("/requirements")
def get_requirements(
    db: Session = Depends(get_db),
    term: Optional[str] = Query(None, description="Term code"),
):
    code = (term or "").strip() or settings.DEFAULT_TERM
    try:
        rows = list_requirements_for_term(db, code)
    except TermNotFoundError as e:
        logger.info("Requirements lookup for unknown term %s", code)
        raise HTTPException(status_code=404, detail={"error": str(e)})

    return {
        "term": code,
        "requirements": [
            {"code": r.code, "name": r.name or r.code, "description": r.description}
            for r in rows
        ],
    }
