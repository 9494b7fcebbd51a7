"""Next date router: exposes the recurrence engine over HTTP."""
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse

from todo_scheduler.routers.dependencies import get_today
from todo_scheduler.services.errors import RepeatRuleError
from todo_scheduler.services.recurrence_engine import next_date, parse_date

router = APIRouter(tags=["Next date"])  # No prefix since main.py adds /api prefix


@router.get("/nextdate", response_class=PlainTextResponse)
async def get_next_date(
    now: str = Query("", description="Reference date as YYYYMMDD, defaults to today"),
    date_: str = Query("", alias="date", description="Anchor date as YYYYMMDD"),
    repeat: str = Query("", description="Repeat rule, e.g. 'd 7', 'w 1,5', 'm -1'"),
    today: date = Depends(get_today),
):
    """Compute the next occurrence of a repeat rule after `now`."""
    reference = today
    if now:
        try:
            reference = parse_date(now)
        except RepeatRuleError:
            return PlainTextResponse("invalid now parameter", status_code=status.HTTP_400_BAD_REQUEST)

    try:
        return PlainTextResponse(next_date(reference, date_, repeat))
    except RepeatRuleError as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_400_BAD_REQUEST)
