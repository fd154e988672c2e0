"""
Paginated search over a CourseRepository.

Two paths:

- direct: count + skip/limit fetch, both pushed to the repository.
- open seats only: ``capacity - enrolled`` cannot be pushed down, so every
  matching course is fetched, sections are filtered in memory, and only then
  is the page sliced. ``total`` and ``has_more`` stay exact at the cost of an
  unbounded fetch; callers that need bounded latency should time out the
  repository call.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from course_search.config import settings
from course_search.schemas.search import SearchFilters
from course_search.search.filters import DayMatchPolicy, SearchQuery, build_search_query, parse_int_or_none
from course_search.search.predicates import Predicate, evaluate
from course_search.search.repository import COURSE_ORDER, CourseRepository

logger = logging.getLogger("course_search.search")


@dataclass
class CourseHit:
    """A course together with the subset of its sections that matched."""
    course: object
    sections: List[object] = field(default_factory=list)

    @property
    def ge_codes(self) -> List[str]:
        return self.course.ge_codes


@dataclass
class SearchPage:
    items: List[CourseHit]
    total: int
    page: int
    page_size: int
    has_more: bool

    @property
    def count(self) -> int:
        return len(self.items)


def has_open_seats(section) -> bool:
    """Only sections known to have a free seat; unknown counts are excluded."""
    seats = section.available_seats
    return seats is not None and seats > 0


def clamp_page(page, page_size, default_page_size: int, max_page_size: int):
    page = parse_int_or_none(page)
    page_size = parse_int_or_none(page_size)
    page = max(1, page if page is not None else 1)
    if page_size is None:
        page_size = default_page_size
    page_size = min(max_page_size, max(1, page_size))
    return page, page_size


def matching_sections(course, section_predicate: Predicate) -> list:
    sections = [s for s in course.sections if evaluate(section_predicate, s)]
    sections.sort(key=lambda s: (s.section_code or "", s.id or 0))
    return sections


class CourseSearchExecutor:
    def __init__(
        self,
        repository: CourseRepository,
        default_term: Optional[str] = None,
        default_page_size: Optional[int] = None,
        max_page_size: Optional[int] = None,
        day_match_policy=None,
    ):
        self.repository = repository
        self.default_term = default_term or settings.DEFAULT_TERM
        self.default_page_size = default_page_size or settings.DEFAULT_PAGE_SIZE
        self.max_page_size = max_page_size or settings.MAX_PAGE_SIZE
        self.day_match_policy = DayMatchPolicy.parse(
            day_match_policy if day_match_policy is not None else settings.DAY_MATCH_POLICY
        )

    def search(self, filters: SearchFilters, page=1, page_size=None) -> SearchPage:
        page, page_size = clamp_page(page, page_size, self.default_page_size, self.max_page_size)
        query = build_search_query(filters, self.default_term, self.day_match_policy)

        if query.open_seats_only:
            return self._search_open_seats(query, page, page_size)
        return self._search_direct(query, page, page_size)

    def _search_direct(self, query: SearchQuery, page: int, page_size: int) -> SearchPage:
        skip = (page - 1) * page_size
        total = self.repository.count_courses(query.course_predicate)
        courses = self.repository.find_courses(query.course_predicate, COURSE_ORDER, skip, page_size)
        items = [CourseHit(c, matching_sections(c, query.section_predicate)) for c in courses]

        logger.debug("direct search term=%s page=%d total=%d", query.term, page, total)
        return SearchPage(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            has_more=skip + len(items) < total,
        )

    def _search_open_seats(self, query: SearchQuery, page: int, page_size: int) -> SearchPage:
        skip = (page - 1) * page_size
        courses = self.repository.find_courses(query.course_predicate, COURSE_ORDER)

        hits = []
        for c in courses:
            sections = [s for s in matching_sections(c, query.section_predicate) if has_open_seats(s)]
            if sections:
                hits.append(CourseHit(c, sections))

        total = len(hits)
        items = hits[skip:skip + page_size]

        logger.debug(
            "open-seats search term=%s fetched=%d kept=%d page=%d",
            query.term, len(courses), total, page,
        )
        return SearchPage(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            has_more=skip + len(items) < total,
        )
