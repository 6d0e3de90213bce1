import logging

from fastapi import APIRouter, Response

from integration.ics_export import generate_ics, ics_filename
from lifecapture.models import EventData

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/export/ics")
async def export_ics(event: EventData) -> Response:
    """Render an (already reviewed) event record as a downloadable .ics file."""
    try:
        body = generate_ics(event)
    except ValueError as e:
        logger.warning(f"Cannot export event {event.title!r}: {e}")
        return Response(content=str(e), status_code=422, media_type="text/plain")

    return Response(
        content=body,
        media_type="text/calendar; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{ics_filename(event.title)}"'},
    )
