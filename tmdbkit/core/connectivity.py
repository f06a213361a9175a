"""Process connectivity tracking.

``ConnectivityMonitor`` holds the last observed ``ConnectivityState``. It is
fed by a ``PathMonitor`` source, which reports path status changes through a
subscribed callback:

- ``ProbePathMonitor`` periodically opens a TCP connection to the API host.
- ``ManualPathMonitor`` is pushed explicitly (forced offline mode, tests).

Example::

    source = ProbePathMonitor("api.themoviedb.org", 443)
    monitor = ConnectivityMonitor(source)
    await source.start()
    ...
    if monitor.current_state().is_online:
        ...
    await source.stop()
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from collections.abc import Callable
from typing import Protocol

from tmdbkit.models.connectivity import ConnectivityState, PathStatus

logger = logging.getLogger(__name__)

PathUpdateHandler = Callable[[PathStatus], None]


class PathMonitor(Protocol):
    def subscribe(self, handler: PathUpdateHandler) -> None: ...

    async def start(self) -> None: ...

    async def stop(self) -> None: ...


class ConnectivityMonitor:
    """Single-writer, many-reader view of network reachability.

    Starts optimistic (``satisfied``) so nothing blocks before the first
    path update arrives.
    """

    def __init__(self, source: PathMonitor) -> None:
        self._lock = threading.Lock()
        self._state = ConnectivityState.from_status(PathStatus.SATISFIED)
        source.subscribe(self._on_path_update)

    def current_state(self) -> ConnectivityState:
        return self._state

    def _on_path_update(self, status: PathStatus) -> None:
        new_state = ConnectivityState.from_status(status)
        with self._lock:
            previous = self._state
            self._state = new_state
        if previous.is_online != new_state.is_online:
            logger.info(
                "Network status: %s (%s)",
                "Connected" if new_state.is_online else "Disconnected",
                status.value,
            )


class _Subscribers:
    def __init__(self) -> None:
        self._handlers: list[PathUpdateHandler] = []

    def subscribe(self, handler: PathUpdateHandler) -> None:
        self._handlers.append(handler)

    def _deliver(self, status: PathStatus) -> None:
        for handler in list(self._handlers):
            handler(status)


class ManualPathMonitor(_Subscribers):
    """Path source driven by ``push``.

    With *initial* set, every new subscriber immediately receives it.
    """

    def __init__(self, initial: PathStatus | None = None) -> None:
        super().__init__()
        self._initial = initial

    def subscribe(self, handler: PathUpdateHandler) -> None:
        super().subscribe(handler)
        if self._initial is not None:
            handler(self._initial)

    def push(self, status: PathStatus) -> None:
        self._deliver(status)

    async def start(self) -> None:
        pass

    async def stop(self) -> None:
        pass


class ProbePathMonitor(_Subscribers):
    """Path source that probes ``host:port`` with a TCP connect.

    A successful connect reports ``satisfied``; a refused, unreachable or
    timed-out connect reports ``unsatisfied``.
    """

    def __init__(
        self,
        host: str,
        port: int,
        interval: float = 10.0,
        timeout: float = 3.0,
    ) -> None:
        super().__init__()
        self._host = host
        self._port = port
        self._interval = interval
        self._timeout = timeout
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start background probing. Idempotent."""
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.create_task(self._run(), name="connectivity-probe")
        logger.info(
            "Connectivity probe started for %s:%d every %.1fs",
            self._host,
            self._port,
            self._interval,
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Connectivity probe stopped")

    async def probe(self) -> PathStatus:
        """Run one reachability check and deliver its result."""
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(self._host, self._port),
                timeout=self._timeout,
            )
        except (OSError, asyncio.TimeoutError) as exc:
            logger.debug("Probe of %s:%d failed: %s", self._host, self._port, exc)
            status = PathStatus.UNSATISFIED
        else:
            writer.close()
            with contextlib.suppress(OSError):
                await writer.wait_closed()
            status = PathStatus.SATISFIED
        self._deliver(status)
        return status

    async def _run(self) -> None:
        while True:
            try:
                await self.probe()
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                logger.error("Error in connectivity probe: %s", exc)
            await asyncio.sleep(self._interval)
