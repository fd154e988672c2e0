# course_search/routers/search.py
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from course_search.database import get_db
from course_search.exceptions import SearchFailedError
from course_search.models.enums import Modality
from course_search.schemas.search import CourseOut, SearchFilters, SearchResponse, SectionOut
from course_search.search.executor import CourseHit, CourseSearchExecutor
from course_search.search.filters import parse_int_or_none
from course_search.search.repository import SqlAlchemyCourseRepository
from course_search.utils.timeparse import normalize_modality, parse_time_to_minutes

import logging
logger = logging.getLogger("course_search.search")


router = APIRouter(tags=["Search"])

_TRUTHY = {"1", "true", "yes", "on"}


def get_executor(db: Session = Depends(get_db)) -> CourseSearchExecutor:
    return CourseSearchExecutor(SqlAlchemyCourseRepository(db))


def parse_minutes_param(value: Optional[str]) -> Optional[int]:
    """"540" (minutes) or a clock time like "9:00 AM"; garbage -> None"""
    if value is None or not value.strip():
        return None
    n = parse_int_or_none(value)
    if n is not None:
        return n if 0 <= n < 24 * 60 else None
    return parse_time_to_minutes(value)


def parse_modality_param(value: Optional[str]) -> Optional[Modality]:
    if not value or not value.strip():
        return None
    modality = normalize_modality(value)
    # unrecognised input means "no modality filter", not UNKNOWN
    if modality is Modality.UNKNOWN and value.strip().upper() != Modality.UNKNOWN.value:
        return None
    return modality


def course_out(hit: CourseHit) -> CourseOut:
    c = hit.course
    return CourseOut(
        id=c.id,
        subject=c.subject,
        number=c.number,
        title=c.title,
        units=c.units,
        ge_codes=hit.ge_codes,
        sections=[SectionOut.model_validate(s) for s in hit.sections],
    )


@router.get("/search", response_model=SearchResponse)
def search_courses(
    executor: CourseSearchExecutor = Depends(get_executor),

    term: Optional[str] = Query(None, description="Term code, e.g. GROSSMONT_2026SP"),
    q: Optional[str] = Query(None, description="Keyword: title, subject or number"),
    subject: Optional[str] = Query(None, description="Subject, exact (case-insensitive)"),
    number: Optional[str] = Query(None, description="Course number prefix"),
    modality: Optional[str] = Query(None, description="IN_PERSON, ONLINE_SYNC, ONLINE_ASYNC, HYBRID"),
    instructor: Optional[str] = Query(None, description="Instructor name substring"),

    # repeatable: ?days=M&days=W or ?days=MWF
    days: list[str] | None = Query(None, description="Day selector(s): M, TR, MWF, Tu/Th ..."),
    time_start: Optional[str] = Query(None, alias="timeStart", description="Earliest start (minutes or clock time)"),
    time_end: Optional[str] = Query(None, alias="timeEnd", description="Latest end (minutes or clock time)"),

    ge: list[str] | None = Query(None, description="GE requirement code(s), any of"),
    open_seats_only: Optional[str] = Query(None, alias="openSeatsOnly"),

    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
):
    filters = SearchFilters(
        term=term,
        q=q,
        subject=subject,
        number=number,
        modality=parse_modality_param(modality),
        instructor=instructor,
        days=[d for d in days or [] if d],
        time_start=parse_minutes_param(time_start),
        time_end=parse_minutes_param(time_end),
        ge=[g for g in ge or [] if g],
        open_seats_only=(open_seats_only or "").strip().lower() in _TRUTHY,
    )

    try:
        result = executor.search(filters, page=page, page_size=page_size)
    except SearchFailedError as e:
        logger.exception("Search failed")
        raise HTTPException(status_code=500, detail={"error": "Search failed", "message": str(e)})

    return SearchResponse(
        count=result.count,
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        has_more=result.has_more,
        results=[course_out(h) for h in result.items],
    )
