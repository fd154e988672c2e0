import secrets
import string
import time
from datetime import datetime, timezone
from typing import List, Optional

from course_search.exceptions import PlanNotFoundError
from course_search.schedule.store import ScheduleStore
from course_search.schemas.schedule import PlanBookState, ScheduleItem, SchedulePlan

DEFAULT_PLAN_NAME = "Plan A"

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_plan_id() -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(7))
    return f"plan_{int(time.time() * 1000)}_{suffix}"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class PlanBook:
    """
    A user's named schedule plans, exactly one of them current.

    Persistence is left to the caller: ``to_dict()`` / ``from_dict()`` give a
    JSON-safe blob for whatever key-value store holds it between sessions.
    """

    def __init__(self, plans: Optional[List[SchedulePlan]] = None, current_plan_id: Optional[str] = None):
        self.plans: List[SchedulePlan] = list(plans or [])
        self.current_plan_id = current_plan_id

    def get_plan(self, plan_id: str) -> Optional[SchedulePlan]:
        return next((p for p in self.plans if p.id == plan_id), None)

    def _require(self, plan_id: str) -> SchedulePlan:
        plan = self.get_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError(plan_id)
        return plan

    def create_plan(self, name: str) -> str:
        now = _now()
        plan = SchedulePlan(id=generate_plan_id(), name=name, items=[], created_at=now, updated_at=now)
        self.plans.append(plan)
        self.current_plan_id = plan.id
        return plan.id

    def switch_plan(self, plan_id: str):
        if self.get_plan(plan_id) is not None:
            self.current_plan_id = plan_id

    def update_plan(self, plan_id: str, items: List[ScheduleItem]):
        plan = self._require(plan_id)
        plan.items = list(items)
        plan.updated_at = _now()

    def rename_plan(self, plan_id: str, new_name: str):
        plan = self._require(plan_id)
        plan.name = new_name
        plan.updated_at = _now()

    def delete_plan(self, plan_id: str):
        self.plans = [p for p in self.plans if p.id != plan_id]
        if self.current_plan_id == plan_id:
            self.current_plan_id = self.plans[0].id if self.plans else None

    def duplicate_plan(self, plan_id: str, new_name: Optional[str] = None) -> Optional[str]:
        plan = self.get_plan(plan_id)
        if plan is None:
            return None

        now = _now()
        copy = SchedulePlan(
            id=generate_plan_id(),
            name=new_name or f"{plan.name} (Copy)",
            items=[item.model_copy(deep=True) for item in plan.items],
            created_at=now,
            updated_at=now,
        )
        self.plans.append(copy)
        self.current_plan_id = copy.id
        return copy.id

    def current_plan(self) -> SchedulePlan:
        """The current plan; a default one is created when there is none."""
        plan = self.get_plan(self.current_plan_id) if self.current_plan_id else None
        if plan is None:
            plan = self._require(self.create_plan(DEFAULT_PLAN_NAME))
        return plan

    # --- ScheduleStore bridge ---

    def store_for(self, plan_id: str) -> ScheduleStore:
        return ScheduleStore(self._require(plan_id).items)

    def save_store(self, plan_id: str, store: ScheduleStore):
        self.update_plan(plan_id, store.items)

    # --- serialization ---

    def to_dict(self) -> dict:
        state = PlanBookState(plans=self.plans, current_plan_id=self.current_plan_id)
        return state.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: dict) -> "PlanBook":
        state = PlanBookState.model_validate(data)
        return cls(plans=state.plans, current_plan_id=state.current_plan_id)
