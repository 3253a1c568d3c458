"""
Retention sweep scheduling.

Host-side helpers that run SessionEngine.reap_expired at startup and on a
fixed cadence. Cleanup is best-effort: failures are logged and never stop
the service from starting or serving.

Dependencies: asyncio, meetup.application.services.session_engine
System role: Background retention enforcement
"""

import asyncio
import logging

from meetup.application.services.session_engine import SessionEngine
from meetup.core.exceptions import StoreError

logger = logging.getLogger(__name__)


async def reap_best_effort(engine: SessionEngine) -> int | None:
    """
    Run one retention sweep, logging instead of raising on store failure.

    Args:
        engine: Session engine to sweep

    Returns:
        Number of sessions deleted, or None if the sweep failed
    """
    try:
        return await engine.reap_expired()
    except StoreError:
        logger.exception("Retention sweep failed")
        return None


class PeriodicReaper:
    """Runs reap_best_effort every interval seconds in a background task."""

    def __init__(self, engine: SessionEngine, interval: float) -> None:
        """
        Initialize periodic reaper.

        Args:
            engine: Session engine to sweep
            interval: Seconds between sweeps
        """
        self.engine = engine
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name="meetup-reaper")
        logger.info("Periodic reaper started", extra={"interval_seconds": self.interval})

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Periodic reaper stopped")

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            await reap_best_effort(self.engine)
