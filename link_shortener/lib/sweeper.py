"""Periodic removal of long-expired links."""

import asyncio
import logging
from datetime import timedelta
from typing import List, Optional

from .analytics import AnalyticsRecorder
from .registry import LinkRegistry


class ExpirySweeper:
    """Background task dropping links whose expiry passed more than a grace period ago.

    Lookups keep detecting expiry lazily; the sweeper only bounds memory.
    """

    def __init__(
        self,
        registry: LinkRegistry,
        analytics: AnalyticsRecorder,
        interval_seconds: float = 60.0,
        grace_seconds: float = 3600.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize expiry sweeper.

        Args:
            registry: Link registry to sweep
            analytics: Analytics recorder whose histories are dropped alongside
            interval_seconds: Seconds between sweeps
            grace_seconds: Seconds a link stays queryable as expired
            logger: Optional logger
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.registry = registry
        self.analytics = analytics
        self.interval_seconds = interval_seconds
        self.grace = timedelta(seconds=grace_seconds)
        self.logger = logger or logging.getLogger(__name__)
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep_once(self) -> List[str]:
        """Remove expired links and their histories.

        Returns:
            The removed short codes
        """
        removed = self.registry.remove_expired(self.grace)
        for shortcode in removed:
            self.analytics.remove(shortcode)

        if removed:
            self.logger.info(f"Expiry sweep: {len(removed)} expired links removed")
        return removed

    def start(self) -> None:
        """Start sweeping on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        self.logger.info(
            f"Expiry sweeper started (interval={self.interval_seconds}s, grace={self.grace.total_seconds()}s)"
        )

    async def stop(self) -> None:
        """Cancel the sweep task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self.logger.info("Expiry sweeper stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.sweep_once()
            except Exception as e:
                self.logger.error(f"Expiry sweep failed: {e}", exc_info=True)
