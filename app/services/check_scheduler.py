"""Delayed availability checks where a newer check supersedes the older one."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from app.core.settings import settings

logger = logging.getLogger(__name__)

CheckFactory = Callable[[], Awaitable[Any]]


class CheckScheduler:
    """Run one pending check per field.

    Each check waits ``delay`` seconds before running. Scheduling a new check
    for a field cancels the in-flight one for that field, so only the latest
    input is ever checked.
    """

    def __init__(self, delay: Optional[float] = None):
        self.delay = settings.check_debounce_seconds if delay is None else delay
        self._tasks: Dict[str, asyncio.Task] = {}

    def schedule(self, field: str, check: CheckFactory) -> asyncio.Task:
        """Schedule ``check`` for ``field`` and return its task."""
        self.cancel(field)
        task = asyncio.create_task(self._run(field, check))
        self._tasks[field] = task
        return task

    async def _run(self, field: str, check: CheckFactory) -> Any:
        await asyncio.sleep(self.delay)
        try:
            return await check()
        finally:
            if self._tasks.get(field) is asyncio.current_task():
                del self._tasks[field]

    async def run(self, field: str, check: CheckFactory) -> Optional[Any]:
        """Schedule ``check`` and wait for it.

        Returns None when a newer check for the same field superseded this one.
        """
        task = self.schedule(field, check)
        await asyncio.wait({task})
        if task.cancelled():
            return None
        return task.result()

    def cancel(self, field: str) -> bool:
        """Cancel the pending check for ``field``. Returns True if one was cancelled."""
        task = self._tasks.pop(field, None)
        if task is None or task.done():
            return False
        task.cancel()
        logger.debug(f"Superseded pending check for '{field}'")
        return True

    def cancel_all(self) -> None:
        for field in list(self._tasks):
            self.cancel(field)

    def pending(self, field: str) -> bool:
        task = self._tasks.get(field)
        return task is not None and not task.done()
