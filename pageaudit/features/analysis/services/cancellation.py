import asyncio
from typing import Optional

from pageaudit.platform.exceptions import AnalysisCancelledError


async def checkpoint(cancel_event: Optional[asyncio.Event] = None) -> None:
    """Yield to the event loop and abort if the run was cancelled."""
    await asyncio.sleep(0)
    if cancel_event is not None and cancel_event.is_set():
        raise AnalysisCancelledError()
