"""
SearchFilters -> predicate tree.

The Section-level predicate decides which Sections of a Course are shown;
the Course-level predicate wraps it in ``Has("sections", ...)`` so a Course
is returned only when at least one of its Sections qualifies.
"""
import enum
import logging
from dataclasses import dataclass
from typing import List, Optional

from course_search.schemas.search import SearchFilters
from course_search.search.predicates import (
    Contains, Eq, Gte, Has, In, Lte, Not, NotNull, Predicate, StartsWith,
    all_of, any_of,
)
from course_search.utils.timeparse import TBA, normalize_days

logger = logging.getLogger("course_search.search")


class DayMatchPolicy(str, enum.Enum):
    # "M" matches a meeting on "MWF"
    CONTAINS = "contains"
    # "M" matches only a meeting whose days are exactly "M"
    EXACT = "exact"

    @classmethod
    def parse(cls, value) -> "DayMatchPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning("Unknown day match policy %r, using %s", value, cls.CONTAINS.value)
            return cls.CONTAINS


@dataclass(frozen=True)
class SearchQuery:
    term: str
    course_predicate: Predicate
    section_predicate: Predicate
    # derived filter, applied after retrieval
    open_seats_only: bool = False


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_int_or_none(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def build_day_selector(selector: str, policy: DayMatchPolicy) -> Optional[Predicate]:
    """One day selector -> Meeting predicate, or None if it names no weekday."""
    days = normalize_days(selector)
    if not days or days == TBA:
        return None

    if len(days) == 1 and policy is DayMatchPolicy.EXACT:
        return Eq("days", days)

    # every letter of the selector must be on the meeting
    return all_of(
        NotNull("days"),
        Not(Eq("days", TBA)),
        *[Contains("days", d) for d in days],
    )


def build_meeting_predicate(
    days: List[str],
    time_start: Optional[int],
    time_end: Optional[int],
    policy: DayMatchPolicy,
) -> Optional[Predicate]:
    window = []
    if time_start is not None:
        window.append(Gte("start_min", time_start))
    if time_end is not None:
        window.append(Lte("end_min", time_end))

    selectors = [s for s in (build_day_selector(d, policy) for d in days or []) if s is not None]
    if not selectors:
        return all_of(*window)

    # the window goes inside each branch: "M at 9am OR W at 2pm"
    return any_of(*[all_of(sel, *window) for sel in selectors])


def build_section_predicate(filters: SearchFilters, term: str, policy: DayMatchPolicy) -> Predicate:
    parts = [Has("term", Eq("code", term))]

    if filters.modality is not None:
        parts.append(Eq("modality", filters.modality))

    meeting_pred = build_meeting_predicate(filters.days, filters.time_start, filters.time_end, policy)
    if meeting_pred is not None:
        parts.append(Has("meetings", meeting_pred))

    instructor = _clean(filters.instructor)
    if instructor:
        parts.append(Has("instructors", Contains("name", instructor, case_insensitive=True)))

    return all_of(*parts)


def build_course_predicate(filters: SearchFilters, section_predicate: Predicate) -> Predicate:
    parts = []

    subject = _clean(filters.subject)
    if subject:
        parts.append(Eq("subject", subject.upper()))

    number = _clean(filters.number)
    if number:
        parts.append(StartsWith("number", number))

    q = _clean(filters.q)
    if q:
        parts.append(any_of(
            Contains("title", q, case_insensitive=True),
            Contains("subject", q.upper()),
            Contains("number", q),
        ))

    ge_codes = tuple(dict.fromkeys(c for c in (_clean(g) for g in filters.ge or []) if c))
    if ge_codes:
        parts.append(Has("requirements", In("code", ge_codes)))

    parts.append(Has("sections", section_predicate))
    return all_of(*parts)


def build_search_query(
    filters: SearchFilters,
    default_term: str,
    policy: DayMatchPolicy = DayMatchPolicy.CONTAINS,
) -> SearchQuery:
    term = _clean(filters.term) or default_term
    section_predicate = build_section_predicate(filters, term, policy)
    return SearchQuery(
        term=term,
        course_predicate=build_course_predicate(filters, section_predicate),
        section_predicate=section_predicate,
        open_seats_only=bool(filters.open_seats_only),
    )
