# course_search/utils/conflict.py
from typing import Dict, List, Sequence

from course_search.schemas.schedule import Conflict, ScheduleItem
from course_search.utils.timeparse import day_set

TIME_CONFLICT = "Time conflict"


def times_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    # half-open [start, end): back-to-back blocks do not overlap
    return a_start < b_end and b_start < a_end


def meetings_conflict(a, b) -> bool:
    """
    Two meetings conflict when:
    1. they share at least one weekday
    2. both have a start/end time (TBA/async never conflicts)
    3. their time intervals overlap
    """
    if not day_set(a.days) & day_set(b.days):
        return False

    if a.start_min is None or a.end_min is None or b.start_min is None or b.end_min is None:
        return False

    return times_overlap(a.start_min, a.end_min, b.start_min, b.end_min)


def find_conflicts(existing: Sequence[ScheduleItem], candidate: ScheduleItem) -> List[Conflict]:
    """One Conflict per existing item that collides with ``candidate``."""
    conflicts = []
    for item in existing:
        # don't compare to itself
        if item.section_id == candidate.section_id:
            continue
        if any(
            meetings_conflict(m1, m2)
            for m1 in item.meetings or []
            for m2 in candidate.meetings or []
        ):
            conflicts.append(Conflict(with_section_id=item.section_id, reason=TIME_CONFLICT))
    return conflicts


def compute_conflict_map(items: Sequence[ScheduleItem]) -> Dict[str, List[Conflict]]:
    """section_id -> conflicts against every other item; items without conflicts are left out."""
    out = {}
    for item in items:
        conflicts = find_conflicts(items, item)
        if conflicts:
            out[item.section_id] = conflicts
    return out
