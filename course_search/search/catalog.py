from sqlalchemy.orm import Session

from course_search.exceptions import TermNotFoundError
from course_search.models.course import Course
from course_search.models.requirement import Requirement
from course_search.models.section import Section
from course_search.models.term import Term


def list_terms(db: Session) -> list[Term]:
    return db.query(Term).order_by(Term.name.desc()).all()


def get_term(db: Session, code: str) -> Term:
    term = db.query(Term).filter(Term.code == code).first()
    if not term:
        raise TermNotFoundError(code)
    return term


def list_requirements_for_term(db: Session, code: str) -> list[Requirement]:
    """Requirements linked to at least one course that has a section in the term."""
    term = get_term(db, code)
    return (
        db.query(Requirement)
        .filter(Requirement.courses.any(Course.sections.any(Section.term_id == term.id)))
        .order_by(Requirement.code.asc())
        .all()
    )
