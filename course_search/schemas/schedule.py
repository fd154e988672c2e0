from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from course_search.schemas.search import MeetingOut, SectionOut


class _ScheduleModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class ScheduleItem(_ScheduleModel):
    # unique key of what the user added
    section_id: str
    # display, e.g. "CS 250"
    course_code: str
    course_title: Optional[str] = None
    term_code: Optional[str] = None
    # what conflicts and the weekly grid are computed from
    meetings: List[MeetingOut] = []
    # full section snapshot for display
    section: Optional[SectionOut] = None


class Conflict(_ScheduleModel):
    with_section_id: str
    reason: str = "Time conflict"


class AddResult(_ScheduleModel):
    ok: bool
    conflicts: List[Conflict] = []
    message: Optional[str] = None


class SchedulePlan(_ScheduleModel):
    id: str
    name: str
    items: List[ScheduleItem] = []
    created_at: datetime
    updated_at: datetime


class PlanBookState(_ScheduleModel):
    plans: List[SchedulePlan] = []
    current_plan_id: Optional[str] = None


# --- request / response bodies ---

class ScheduleItemsIn(_ScheduleModel):
    items: List[ScheduleItem] = Field(default_factory=list)


class ScheduleCheckIn(_ScheduleModel):
    items: List[ScheduleItem] = Field(default_factory=list)
    candidate: ScheduleItem


class ConflictMapOut(_ScheduleModel):
    conflicts: Dict[str, List[Conflict]]
