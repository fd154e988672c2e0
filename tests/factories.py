"""Small hand-built catalog shared by the in-memory and SQLite tests.

Spring 2026 (default term) courses, in (subject, number) order:

    BIOL 100  601 MW 10:00-10:50  24/24 full
    CS 150    101 MWF 9:00-9:50   30/30 full, Lovelace
              102 TBA (async)     30/25, Turing
    CS 250    201 TR 9:00-10:15   capacity unknown, Hopper
    MATH 150  401 W 14:00-14:55   35/20, Lovelace       GE-IIB, GE-IVC
    MATH 180  301 M 14:00-15:50   40/10 hybrid, Turing  GE-IVC

CS 150 also carries GE-IIB. Fall 2025 holds ART 100 (501) and a second
MATH 180 section (302).
"""
from course_search.models.course import Course
from course_search.models.enums import Modality, SectionStatus
from course_search.models.instructor import Instructor
from course_search.models.meeting import Meeting
from course_search.models.requirement import Requirement
from course_search.models.section import Section
from course_search.models.term import Term
from course_search.schemas.schedule import ScheduleItem
from course_search.schemas.search import MeetingOut


def meeting(days, start=None, end=None, location=None):
    return Meeting(days=days, start_min=start, end_min=end, location=location)


def section(id, code, term, meetings=(), capacity=None, enrolled=None,
            modality=Modality.IN_PERSON, status=SectionStatus.OPEN, instructors=()):
    return Section(
        id=id,
        section_code=code,
        term=term,
        modality=modality,
        status=status,
        capacity=capacity,
        enrolled=enrolled,
        meetings=list(meetings),
        instructors=list(instructors),
    )


def course(id, subject, number, title=None, sections=(), requirements=(), units="3"):
    return Course(
        id=id,
        subject=subject,
        number=number,
        title=title,
        units=units,
        sections=list(sections),
        requirements=list(requirements),
    )


def build_catalog():
    sp = Term(id=1, code="2026SP", name="Spring 2026")
    fa = Term(id=2, code="2025FA", name="Fall 2025")

    ge_iib = Requirement(id=1, code="GE-IIB", name="Social Sciences")
    ge_ivc = Requirement(id=2, code="GE-IVC", name="Mathematics")

    ada = Instructor(id=1, name="Ada Lovelace")
    alan = Instructor(id=2, name="Alan Turing")
    grace = Instructor(id=3, name="Grace Hopper")

    return [
        course(1, "CS", "150", "Intro to Programming", requirements=[ge_iib], sections=[
            section(101, "101", sp, [meeting("MWF", 540, 590, "A101")], 30, 30, instructors=[ada]),
            section(102, "102", sp, [meeting("TBA")], 30, 25,
                    modality=Modality.ONLINE_ASYNC, instructors=[alan]),
        ]),
        course(2, "CS", "250", "Data Structures", sections=[
            section(201, "201", sp, [meeting("TR", 540, 615, "B202")], instructors=[grace]),
        ]),
        course(3, "MATH", "180", "Calculus I", requirements=[ge_ivc], sections=[
            section(301, "301", sp, [meeting("M", 840, 950)], 40, 10,
                    modality=Modality.HYBRID, instructors=[alan]),
            section(302, "302", fa, [meeting("MW", 600, 650)], 40, 0),
        ]),
        course(4, "MATH", "150", "Precalculus", requirements=[ge_ivc, ge_iib], sections=[
            section(401, "401", sp, [meeting("W", 840, 895)], 35, 20, instructors=[ada]),
        ]),
        course(5, "ART", "100", "Drawing", sections=[
            section(501, "501", fa, [meeting("MWF", 540, 590)], 20, 5),
        ]),
        course(6, "BIOL", "100", "Biology", sections=[
            section(601, "601", sp, [meeting("MW", 600, 650)], 24, 24, status=SectionStatus.CLOSED),
        ]),
    ]


def item(section_id, *meetings, course_code=None):
    """ScheduleItem with meetings given as (days, start, end) tuples."""
    return ScheduleItem(
        section_id=str(section_id),
        course_code=course_code or f"TEST {section_id}",
        meetings=[MeetingOut(days=d, start_min=s, end_min=e) for d, s, e in meetings],
    )


def codes(page):
    return [h.course.code for h in page.items]


def section_ids(page, code):
    hit = next(h for h in page.items if h.course.code == code)
    return [s.id for s in hit.sections]
