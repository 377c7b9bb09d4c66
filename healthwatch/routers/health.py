"""Read-only inspection API for current and historical status."""
import logging
from typing import Dict, List

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from ..schemas.status import StatusRecordResponse, TransitionEntryResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=Dict[str, StatusRecordResponse])
async def get_current_status(request: Request):
    """Latest status of every endpoint that has been checked."""
    store = request.app.state.store
    return {
        endpoint: StatusRecordResponse.from_record(record)
        for endpoint, record in store.snapshot().items()
    }


@router.get("/history", response_class=PlainTextResponse)
async def get_history(request: Request):
    """Raw transition log."""
    transition_log = request.app.state.transition_log
    try:
        history = transition_log.read_raw()
    except OSError as e:
        logger.error(f"Error reading history log: {e}")
        return PlainTextResponse("Error reading history log.", status_code=500)

    if history is None:
        return PlainTextResponse("No history log found.", status_code=404)
    return PlainTextResponse(history)


@router.get("/history/entries", response_model=List[TransitionEntryResponse])
async def get_history_entries(request: Request):
    """Transition log parsed into entries, oldest first."""
    transition_log = request.app.state.transition_log
    return [TransitionEntryResponse.from_entry(e) for e in transition_log.history()]
