from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from course_search.models.enums import Modality, SectionStatus


class SearchFilters(BaseModel):
    """Loosely-typed search criteria; every field is optional."""
    term: Optional[str] = None
    q: Optional[str] = None
    subject: Optional[str] = None
    number: Optional[str] = None
    modality: Optional[Modality] = None
    instructor: Optional[str] = None
    days: List[str] = Field(default_factory=list)
    # minutes since midnight
    time_start: Optional[int] = None
    time_end: Optional[int] = None
    ge: List[str] = Field(default_factory=list)
    open_seats_only: bool = False


class _WireModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TermOut(_WireModel):
    id: Optional[int] = None
    code: str
    name: str


class MeetingOut(_WireModel):
    id: Optional[int] = None
    days: Optional[str] = None
    start_min: Optional[int] = None
    end_min: Optional[int] = None
    location: Optional[str] = None


class InstructorOut(_WireModel):
    id: Optional[int] = None
    name: str


class SectionOut(_WireModel):
    id: int
    section_code: str
    class_number: Optional[str] = None
    status: SectionStatus = SectionStatus.UNKNOWN
    modality: Modality = Modality.UNKNOWN
    capacity: Optional[int] = None
    enrolled: Optional[int] = None
    waitlist: Optional[int] = None
    campus: Optional[str] = None
    term: Optional[TermOut] = None
    meetings: List[MeetingOut] = []
    instructors: List[InstructorOut] = []


class CourseOut(_WireModel):
    id: int
    subject: str
    number: str
    title: Optional[str] = None
    units: Optional[str] = None
    ge_codes: List[str] = []
    sections: List[SectionOut] = []


class SearchResponse(_WireModel):
    count: int
    total: int
    page: int
    page_size: int
    has_more: bool
    results: List[CourseOut]
