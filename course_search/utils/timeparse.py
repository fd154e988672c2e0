import re
from typing import Optional

from course_search.models.enums import Modality, SectionStatus

DAY_ORDER = "MTWRFSU"
TBA = "TBA"

_DAY_TOKENS = {
    "M": "M", "MO": "M", "MON": "M", "MONDAY": "M",
    "T": "T", "TU": "T", "TUE": "T", "TUES": "T", "TUESDAY": "T",
    "W": "W", "WE": "W", "WED": "W", "WEDS": "W", "WEDNESDAY": "W",
    "R": "R", "TH": "R", "THU": "R", "THUR": "R", "THURS": "R", "THURSDAY": "R",
    "F": "F", "FR": "F", "FRI": "F", "FRIDAY": "F",
    "S": "S", "SA": "S", "SAT": "S", "SATURDAY": "S",
    "U": "U", "SU": "U", "SUN": "U", "SUNDAY": "U",
}
# longest first so "TH" wins over "T" + "H"
_DAY_KEYS = sorted(_DAY_TOKENS, key=len, reverse=True)

_TBA_TOKENS = {"TBA", "TBD", "ARR", "ARRANGED"}

_MERIDIEM_RE = re.compile(r"\s*([AP])\.?\s*M\.?$")
_SEPARATORS_RE = re.compile(r"[^A-Z]+")
_CANONICAL_DAYS_RE = re.compile(r"M?T?W?R?F?S?U?")


def parse_time_to_minutes(text) -> Optional[int]:
    """
    "9:30 AM" -> 570, "14:30" -> 870, "930" -> 570, "2 PM" -> 840
    anything else -> None
    """
    if text is None:
        return None
    s = str(text).strip().upper()
    if not s:
        return None

    meridiem = None
    m = _MERIDIEM_RE.search(s)
    if m:
        meridiem = m.group(1)
        s = s[: m.start()].strip()
    if not s:
        return None

    if ":" in s:
        parts = s.split(":")
        # "14:30:00" -> seconds ignored
        if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
            return None
        if len(parts[1]) != 2:
            return None
        hours, minutes = int(parts[0]), int(parts[1])
    else:
        if not s.isdigit():
            return None
        if len(s) <= 2:
            hours, minutes = int(s), 0
        elif len(s) in (3, 4):
            # "930" -> 9:30, "1430" -> 14:30
            hours, minutes = int(s[:-2]), int(s[-2:])
        else:
            return None

    if meridiem:
        if not 1 <= hours <= 12:
            return None
        if meridiem == "P" and hours != 12:
            hours += 12
        elif meridiem == "A" and hours == 12:
            hours = 0

    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def minutes_to_label(minutes: int) -> str:
    """570 -> "9:30 AM" """
    h24, m = divmod(minutes, 60)
    ampm = "PM" if h24 >= 12 else "AM"
    h12 = (h24 + 11) % 12 + 1
    return f"{h12}:{m:02d} {ampm}"


def normalize_days(text) -> Optional[str]:
    """
    "Tu/Th" -> "TR", "FWM" -> "MWF", "Monday, Wednesday" -> "MW", "TBA" -> "TBA"
    returns None when no weekday is recognised

    A chunk with any letters left over after tokenizing ("Mx", "Weekly")
    contributes nothing.
    """
    if text is None:
        return None
    s = str(text).strip().upper()
    if not s:
        return None

    chunks = [c for c in _SEPARATORS_RE.split(s) if c]
    if chunks and all(c in _TBA_TOKENS for c in chunks):
        return TBA

    found = set()
    for chunk in chunks:
        if chunk in _TBA_TOKENS:
            continue
        # "Mondays" -> "MONDAY"
        if chunk.endswith("DAYS"):
            chunk = chunk[:-1]
        days = _tokenize_days(chunk)
        if days:
            found.update(days)

    if not found:
        return None
    return "".join(d for d in DAY_ORDER if d in found)


def _tokenize_days(chunk: str) -> Optional[set]:
    days = set()
    i = 0
    while i < len(chunk):
        for key in _DAY_KEYS:
            if chunk.startswith(key, i):
                days.add(_DAY_TOKENS[key])
                i += len(key)
                break
        else:
            return None
    return days


def day_set(days: Optional[str]) -> set:
    """
    Days string -> set of letters. TBA and empty give an empty set.

    Canonical strings ("MWF", "SU") are read letter by letter; anything else
    ("Tu/Th", "TUESDAY") goes through normalize_days first.
    """
    if not days:
        return set()
    s = str(days).strip()
    if not _CANONICAL_DAYS_RE.fullmatch(s):
        s = normalize_days(s) or ""
    if s == TBA:
        return set()
    return set(s)


def normalize_modality(text) -> Modality:
    if not text:
        return Modality.UNKNOWN
    s = str(text).strip().upper().replace("-", "_").replace(" ", "_")

    if s in Modality.__members__:
        return Modality[s]

    if "PERSON" in s or "FACE" in s:
        return Modality.IN_PERSON
    if "ONLINE" in s and ("ASYNC" in s or "SELF" in s):
        return Modality.ONLINE_ASYNC
    if "ONLINE" in s and ("SYNC" in s or "LIVE" in s):
        return Modality.ONLINE_SYNC
    if "HYBRID" in s or "BLENDED" in s:
        return Modality.HYBRID
    return Modality.UNKNOWN


def normalize_status(text) -> SectionStatus:
    if not text:
        return SectionStatus.UNKNOWN
    s = str(text).strip().upper()

    if s in SectionStatus.__members__:
        return SectionStatus[s]

    if "OPEN" in s or "AVAILABLE" in s:
        return SectionStatus.OPEN
    if "CLOSED" in s or "FULL" in s:
        return SectionStatus.CLOSED
    if "WAIT" in s:
        return SectionStatus.WAITLIST
    return SectionStatus.UNKNOWN
