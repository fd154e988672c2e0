
from __future__ import annotations
from typing import List, Dict, Any
from io import BytesIO
from collections import OrderedDict
from datetime import datetime

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Font, Alignment

from course_search.schemas.schedule import ScheduleItem
from course_search.utils.timeparse import TBA, minutes_to_label


def schedule_rows(items: List[ScheduleItem]) -> List[Dict[str, Any]]:
    """One row per meeting; an item without meetings still gets a row."""
    rows = []
    for item in items:
        meetings = item.meetings or [None]
        for m in meetings:
            timed = m is not None and m.start_min is not None and m.end_min is not None
            rows.append(OrderedDict([
                ("Section", item.section_id),
                ("Course", item.course_code),
                ("Title", item.course_title or ""),
                ("Term", item.term_code or ""),
                ("Days", (m.days or "") if m is not None else TBA),
                ("Start", minutes_to_label(m.start_min) if timed else ""),
                ("End", minutes_to_label(m.end_min) if timed else ""),
                ("Location", (m.location or "") if m is not None else ""),
            ]))
    return rows


def rows_to_xlsx_bytes(rows: List[Dict[str, Any]], sheet_name: str = "Schedule") -> bytes:
    """
    rows: list of dict, each dict is a row
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]

    if not rows:
        ws.append(["No data"])
        buf = BytesIO()
        wb.save(buf)
        return buf.getvalue()

    headers = list(rows[0].keys())
    ws.append(headers)

    # header style
    header_font = Font(bold=True)
    for col_idx, _h in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx)
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for r in rows:
        ws.append([r.get(h) for h in headers])
    ws.freeze_panes = "A2"

    # autosize columns
    for col_idx, h in enumerate(headers, start=1):
        max_len = len(str(h))
        for row_idx in range(2, ws.max_row + 1):
            v = ws.cell(row=row_idx, column=col_idx).value
            if v is None:
                continue
            max_len = max(max_len, len(str(v)))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max_len + 2, 60)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def schedule_to_xlsx_bytes(items: List[ScheduleItem]) -> bytes:
    return rows_to_xlsx_bytes(schedule_rows(items), sheet_name="Schedule")


def make_filename(prefix: str = "schedule", ext: str = "xlsx") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}.{ext}"
