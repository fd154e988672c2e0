"""
Storage-independent predicate tree over the Course -> Section -> Meeting /
Instructor / Requirement graph.

Leaves compare one attribute of the current entity; ``Has`` steps across a
relationship ("has a related X satisfying P"). The same tree is evaluated in
memory by :func:`evaluate` and compiled to SQL by
``course_search.search.repository.compile_predicate``.
"""
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class Eq:
    field: str
    value: Any


@dataclass(frozen=True)
class Contains:
    field: str
    value: str
    case_insensitive: bool = False


@dataclass(frozen=True)
class StartsWith:
    field: str
    value: str


@dataclass(frozen=True)
class In:
    field: str
    values: Tuple[Any, ...]


@dataclass(frozen=True)
class Gte:
    field: str
    value: Any


@dataclass(frozen=True)
class Lte:
    field: str
    value: Any


@dataclass(frozen=True)
class NotNull:
    field: str


@dataclass(frozen=True)
class And:
    children: Tuple["Predicate", ...]


@dataclass(frozen=True)
class Or:
    children: Tuple["Predicate", ...]


@dataclass(frozen=True)
class Not:
    child: "Predicate"


@dataclass(frozen=True)
class Has:
    relation: str
    where: Optional["Predicate"] = None


Predicate = Union[Eq, Contains, StartsWith, In, Gte, Lte, NotNull, And, Or, Not, Has]

_LEAVES = (Eq, Contains, StartsWith, In, Gte, Lte, NotNull)


def all_of(*preds: Optional[Predicate]) -> Optional[Predicate]:
    """AND of the non-None predicates; None when there are none."""
    parts = tuple(p for p in preds if p is not None)
    if not parts:
        return None
    if len(parts) == 1:
        return parts[0]
    return And(parts)


def any_of(*preds: Optional[Predicate]) -> Optional[Predicate]:
    """OR of the non-None predicates; None when there are none."""
    parts = tuple(p for p in preds if p is not None)
    if not parts:
        return None
    if len(parts) == 1:
        return parts[0]
    return Or(parts)


def evaluate(pred: Optional[Predicate], obj) -> bool:
    """Evaluate ``pred`` against any object exposing the fields as attributes.

    ``None`` matches everything. Comparisons against a missing (None) value
    are false, the way SQL treats NULL.
    """
    if pred is None:
        return True

    if isinstance(pred, And):
        return all(evaluate(c, obj) for c in pred.children)
    if isinstance(pred, Or):
        return any(evaluate(c, obj) for c in pred.children)
    if isinstance(pred, Not):
        return not evaluate(pred.child, obj)

    if isinstance(pred, Has):
        target = getattr(obj, pred.relation, None)
        if target is None:
            return False
        if isinstance(target, (list, tuple, set)):
            return any(evaluate(pred.where, t) for t in target)
        return evaluate(pred.where, target)

    if not isinstance(pred, _LEAVES):
        raise TypeError(f"unknown predicate node: {pred!r}")

    value = getattr(obj, pred.field, None)

    if isinstance(pred, NotNull):
        return value is not None
    if value is None:
        return False

    if isinstance(pred, Eq):
        return value == pred.value
    if isinstance(pred, Contains):
        if pred.case_insensitive:
            return pred.value.lower() in str(value).lower()
        return pred.value in str(value)
    if isinstance(pred, StartsWith):
        return str(value).startswith(pred.value)
    if isinstance(pred, In):
        return value in pred.values
    if isinstance(pred, Gte):
        return value >= pred.value
    return value <= pred.value
