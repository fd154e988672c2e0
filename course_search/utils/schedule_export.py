from datetime import datetime, timedelta, timezone
from typing import List, Optional

from course_search.schemas.schedule import ScheduleItem
from course_search.utils.timeparse import DAY_ORDER, TBA, day_set, minutes_to_label

TITLE = "Course Schedule"


def _heading(item: ScheduleItem) -> str:
    if item.course_title:
        return f"{item.course_code} - {item.course_title}"
    return item.course_code


def format_meeting(m) -> Optional[str]:
    """MWF 9:00 AM–9:50 AM @ A101 / TBA / None for a meeting with nothing to show"""
    if m.days and m.days != TBA and m.start_min is not None and m.end_min is not None:
        room = f" @ {m.location}" if m.location else ""
        return f"{m.days} {minutes_to_label(m.start_min)}–{minutes_to_label(m.end_min)}{room}"
    if m.days == TBA:
        return TBA
    return None


def export_schedule_as_text(items: List[ScheduleItem]) -> str:
    if not items:
        return "Empty schedule"

    lines = [TITLE, "=" * 50, ""]
    for item in items:
        lines.append(_heading(item))
        if item.term_code:
            lines.append(f"Term: {item.term_code}")

        shown = [s for s in (format_meeting(m) for m in item.meetings) if s]
        if shown:
            lines.append("Meetings:")
            lines.extend(f"  {s}" for s in shown)
        lines.append("")

    return "\n".join(lines) + "\n"


def _ics_text(value) -> str:
    """Escape a TEXT value (RFC 5545 3.3.11)."""
    return (
        str(value)
        .replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def _ics_stamp(dt: datetime) -> str:
    return dt.strftime("%Y%m%dT%H%M%S")


def export_schedule_as_ics(items: List[ScheduleItem], now: Optional[datetime] = None) -> str:
    """
    Basic iCalendar export: one weekly-recurring event per timed meeting,
    anchored in the week of ``now``. TBA/async meetings are skipped.
    """
    now = now or datetime.now(timezone.utc)
    monday = (now - timedelta(days=now.weekday())).replace(
        hour=0, minute=0, second=0, microsecond=0, tzinfo=None,
    )
    byday = {"M": "MO", "T": "TU", "W": "WE", "R": "TH", "F": "FR", "S": "SA", "U": "SU"}

    out = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//course_search//Course Schedule//EN",
        "CALSCALE:GREGORIAN",
    ]
    stamp = now.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    for item in items:
        for idx, m in enumerate(item.meetings):
            if m.start_min is None or m.end_min is None:
                continue
            days = day_set(m.days)
            letters = [d for d in DAY_ORDER if d in days]
            if not letters:
                continue

            day = monday + timedelta(days=DAY_ORDER.index(letters[0]))
            start = day + timedelta(minutes=m.start_min)
            end = day + timedelta(minutes=m.end_min)

            out.append("BEGIN:VEVENT")
            out.append(f"UID:schedule-{item.section_id}-{idx}@course-search")
            out.append(f"DTSTAMP:{stamp}")
            out.append(f"DTSTART:{_ics_stamp(start)}")
            out.append(f"DTEND:{_ics_stamp(end)}")
            out.append("RRULE:FREQ=WEEKLY;BYDAY=" + ",".join(byday[d] for d in letters))
            out.append(f"SUMMARY:{_ics_text(_heading(item))}")
            if m.location:
                out.append(f"LOCATION:{_ics_text(m.location)}")
            out.append(f"DESCRIPTION:Section {_ics_text(item.section_id)}")
            out.append("END:VEVENT")

    out.append("END:VCALENDAR")
    # RFC 5545 line endings
    return "\r\n".join(out) + "\r\n"
