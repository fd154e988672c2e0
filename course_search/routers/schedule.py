"""
Stateless schedule endpoints.

The schedule itself lives with the client (one ScheduleStore per session);
these endpoints run the same admission check and conflict map server-side
for whatever items the client sends.
"""
from fastapi import APIRouter, Query
from fastapi.responses import Response, StreamingResponse

from course_search.schedule.store import ScheduleStore
from course_search.schemas.schedule import AddResult, ConflictMapOut, ScheduleCheckIn, ScheduleItemsIn
from course_search.utils.conflict import compute_conflict_map
from course_search.utils.excel_export import make_filename, schedule_to_xlsx_bytes
from course_search.utils.schedule_export import export_schedule_as_ics, export_schedule_as_text

router = APIRouter(prefix="/schedule", tags=["Schedule"])


# would this candidate be admitted?
@router.post("/check", response_model=AddResult)
def check_add(body: ScheduleCheckIn):
    store = ScheduleStore(body.items)
    return store.add_section(body.candidate)


@router.post("/conflicts", response_model=ConflictMapOut)
def conflict_map(body: ScheduleItemsIn):
    return ConflictMapOut(conflicts=compute_conflict_map(body.items))


@router.post("/export")
def export_schedule(
    body: ScheduleItemsIn,
    format: str = Query("text", pattern="^(text|ics|xlsx)$"),
):
    if format == "xlsx":
        filename = make_filename("schedule", "xlsx")
        return StreamingResponse(
            iter([schedule_to_xlsx_bytes(body.items)]),
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    if format == "ics":
        filename = make_filename("schedule", "ics")
        return Response(
            content=export_schedule_as_ics(body.items),
            media_type="text/calendar",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    return Response(content=export_schedule_as_text(body.items), media_type="text/plain")
