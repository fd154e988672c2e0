"""
Per-session schedule state with a reject-on-conflict admission policy.

A candidate that overlaps anything already chosen is never added, so the
weekly grid cannot gain two overlapping blocks. The conflict map is still
recomputed after every mutation, which keeps any collisions that were
loaded from a saved plan visible.
"""
import logging
from typing import Dict, Iterable, List, Optional

from course_search.schemas.schedule import AddResult, Conflict, ScheduleItem
from course_search.utils.conflict import compute_conflict_map, find_conflicts

logger = logging.getLogger("course_search.schedule")

CONFLICT_MESSAGE = "That section conflicts with something already in your schedule."


class ScheduleStore:
    """Not thread-safe; one instance per session, one mutation at a time."""

    def __init__(self, items: Optional[Iterable[ScheduleItem]] = None):
        self._items: List[ScheduleItem] = []
        self._conflict_map: Dict[str, List[Conflict]] = {}
        self.last_error: Optional[str] = None

        # saved plans are loaded as-is, duplicates dropped
        for item in items or []:
            if not self.has_section(item.section_id):
                self._items.append(item)
        self._recompute()

    @property
    def items(self) -> List[ScheduleItem]:
        return list(self._items)

    @property
    def conflict_map(self) -> Dict[str, List[Conflict]]:
        return {k: list(v) for k, v in self._conflict_map.items()}

    def conflicts_for(self, section_id: str) -> List[Conflict]:
        return list(self._conflict_map.get(section_id, []))

    def has_section(self, section_id: str) -> bool:
        return any(x.section_id == section_id for x in self._items)

    def __len__(self):
        return len(self._items)

    def _recompute(self):
        self._conflict_map = compute_conflict_map(self._items)

    def add_section(self, item: ScheduleItem) -> AddResult:
        if self.has_section(item.section_id):
            # already added, treat as no-op
            return AddResult(ok=True)

        conflicts = find_conflicts(self._items, item)
        if conflicts:
            self.last_error = CONFLICT_MESSAGE
            self._recompute()
            logger.info(
                "Rejected section %s: conflicts with %s",
                item.section_id, ", ".join(c.with_section_id for c in conflicts),
            )
            return AddResult(ok=False, conflicts=conflicts, message=CONFLICT_MESSAGE)

        self._items.append(item)
        self.last_error = None
        self._recompute()
        return AddResult(ok=True)

    def remove_section(self, section_id: str):
        self._items = [x for x in self._items if x.section_id != section_id]
        self._recompute()

    def clear(self):
        self._items = []
        self._conflict_map = {}
        self.last_error = None
