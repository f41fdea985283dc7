"""Caller-owned simulation clock and per-view tracking sessions."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, Optional

from ...config import settings
from ...models.domain import TrackingSnapshot
from .engine import TrackingParameters, compute_tracking_snapshot

logger = logging.getLogger(__name__)

TickCallback = Callable[[int], None]
SnapshotListener = Callable[[TrackingSnapshot], None]


class SimulationClock:
    """Periodic tick counter driving the simulated courier wobble.

    The clock is an explicit resource: start it when a tracking view opens and
    stop it when the view closes. Each view owns its own clock.
    """

    def __init__(self, interval: float | None = None, on_tick: TickCallback | None = None) -> None:
        self.interval = interval if interval is not None else settings.tick_interval_seconds
        if self.interval <= 0:
            raise ValueError("Clock interval must be positive.")
        self.on_tick = on_tick
        self.tick = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the tick loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.tick += 1
            if self.on_tick is not None:
                try:
                    self.on_tick(self.tick)
                except Exception:
                    logger.exception("Tick callback failed")

    async def __aenter__(self) -> "SimulationClock":
        self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()


class TrackingSession:
    """Latest tracking inputs for one open order view plus its own clock.

    Every input change or clock tick recomputes a fresh snapshot and hands it to
    subscribers. ``previous`` keeps the prior snapshot so renderers can animate
    between positions.
    """

    def __init__(
        self,
        pickup: Any,
        drop: Any,
        status: Any = None,
        *,
        order_id: str | None = None,
        params: TrackingParameters | None = None,
        interval: float | None = None,
    ) -> None:
        self.order_id = order_id
        self.pickup = pickup
        self.drop = drop
        self.status = status
        self.live_fix: Any = None
        self.observed_at: Optional[datetime] = None
        self.params = params or TrackingParameters.from_settings()
        self.clock = SimulationClock(interval=interval, on_tick=self._on_tick)
        self.current: Optional[TrackingSnapshot] = None
        self.previous: Optional[TrackingSnapshot] = None
        self._listeners: list[SnapshotListener] = []

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> TrackingSnapshot:
        return compute_tracking_snapshot(
            self.pickup,
            self.drop,
            self.status,
            self.live_fix,
            self.clock.tick,
            observed_at=self.observed_at,
            params=self.params,
        )

    def refresh(self) -> TrackingSnapshot:
        snapshot = self.snapshot()
        self.previous, self.current = self.current, snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener failed for order %s", self.order_id)
        return snapshot

    def update_status(self, status: Any) -> TrackingSnapshot:
        self.status = status
        return self.refresh()

    def update_points(self, pickup: Any = None, drop: Any = None) -> TrackingSnapshot:
        if pickup is not None:
            self.pickup = pickup
        if drop is not None:
            self.drop = drop
        return self.refresh()

    def update_live_fix(self, live_fix: Any, observed_at: Optional[datetime] = None) -> TrackingSnapshot:
        self.live_fix = live_fix
        self.observed_at = observed_at
        return self.refresh()

    def clear_live_fix(self) -> TrackingSnapshot:
        return self.update_live_fix(None)

    def _on_tick(self, tick: int) -> None:
        self.refresh()

    def start(self) -> TrackingSnapshot:
        self.clock.start()
        return self.refresh()

    async def close(self) -> None:
        await self.clock.stop()
        self._listeners.clear()

    async def __aenter__(self) -> "TrackingSession":
        self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
