import logging
from typing import Iterable, List, Optional, Protocol, Sequence

from sqlalchemy import and_, false, not_, or_, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from course_search.exceptions import SearchFailedError
from course_search.models.course import Course
from course_search.models.section import Section
from course_search.search.predicates import (
    And, Contains, Eq, Gte, Has, In, Lte, Not, NotNull, Or, Predicate, StartsWith,
    evaluate,
)

logger = logging.getLogger("course_search.repository")

COURSE_ORDER = ("subject", "number")


class CourseRepository(Protocol):
    def find_courses(
        self,
        predicate: Optional[Predicate],
        order_by: Sequence[str] = COURSE_ORDER,
        skip: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Course]:
        ...

    def count_courses(self, predicate: Optional[Predicate]) -> int:
        ...


def _sort_key(order_by: Sequence[str]):
    def key(obj):
        # None sorts last, like NULLS LAST
        return tuple((getattr(obj, f) is None, getattr(obj, f) or "") for f in order_by)
    return key


class InMemoryCourseRepository:
    """Evaluates predicates over a list of (possibly transient) Course objects."""

    def __init__(self, courses: Iterable = ()):
        self.courses = list(courses)

    def find_courses(self, predicate, order_by=COURSE_ORDER, skip=None, limit=None):
        rows = [c for c in self.courses if evaluate(predicate, c)]
        rows.sort(key=_sort_key(order_by))
        start = skip or 0
        end = start + limit if limit is not None else None
        return rows[start:end]

    def count_courses(self, predicate):
        return sum(1 for c in self.courses if evaluate(predicate, c))


def compile_predicate(pred: Optional[Predicate], model):
    """Predicate tree -> SQLAlchemy boolean expression rooted at ``model``."""
    if pred is None:
        return true()

    if isinstance(pred, And):
        if not pred.children:
            return true()
        return and_(*[compile_predicate(c, model) for c in pred.children])
    if isinstance(pred, Or):
        if not pred.children:
            return false()
        return or_(*[compile_predicate(c, model) for c in pred.children])
    if isinstance(pred, Not):
        return not_(compile_predicate(pred.child, model))

    if isinstance(pred, Has):
        rel = getattr(model, pred.relation)
        target = rel.property.mapper.class_
        inner = compile_predicate(pred.where, target) if pred.where is not None else None
        if rel.property.uselist:
            return rel.any(inner) if inner is not None else rel.any()
        return rel.has(inner) if inner is not None else rel.has()

    col = getattr(model, pred.field)

    if isinstance(pred, NotNull):
        return col.is_not(None)
    if isinstance(pred, Eq):
        return col == pred.value
    if isinstance(pred, Contains):
        if pred.case_insensitive:
            return col.icontains(pred.value, autoescape=True)
        return col.contains(pred.value, autoescape=True)
    if isinstance(pred, StartsWith):
        return col.startswith(pred.value, autoescape=True)
    if isinstance(pred, In):
        return col.in_(list(pred.values))
    if isinstance(pred, Gte):
        return col >= pred.value
    if isinstance(pred, Lte):
        return col <= pred.value

    raise TypeError(f"unknown predicate node: {pred!r}")


class SqlAlchemyCourseRepository:
    def __init__(self, db: Session):
        self.db = db

    def _base_query(self, predicate):
        # EXISTS subqueries keep one row per course, no DISTINCT needed
        return self.db.query(Course).filter(compile_predicate(predicate, Course))

    def find_courses(self, predicate, order_by=COURSE_ORDER, skip=None, limit=None):
        try:
            q = (
                self._base_query(predicate)
                .options(
                    selectinload(Course.sections).selectinload(Section.meetings),
                    selectinload(Course.sections).selectinload(Section.instructors),
                    selectinload(Course.sections).joinedload(Section.term),
                    selectinload(Course.requirements),
                )
                .order_by(*[getattr(Course, f).asc() for f in order_by], Course.id.asc())
            )
            if skip:
                q = q.offset(skip)
            if limit is not None:
                q = q.limit(limit)
            return q.all()
        except SQLAlchemyError as e:
            logger.exception("find_courses failed")
            raise SearchFailedError(str(e)) from e

    def count_courses(self, predicate):
        try:
            return self._base_query(predicate).count()
        except SQLAlchemyError as e:
            logger.exception("count_courses failed")
            raise SearchFailedError(str(e)) from e
