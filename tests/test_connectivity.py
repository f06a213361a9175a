from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError

from tmdbkit.core.connectivity import (
    ConnectivityMonitor,
    ManualPathMonitor,
    ProbePathMonitor,
)
from tmdbkit.models.connectivity import ConnectivityState, PathStatus


class TestConnectivityMonitor:
    def test_defaults_to_online(self):
        monitor = ConnectivityMonitor(ManualPathMonitor())
        state = monitor.current_state()
        assert state.is_online is True
        assert state.detail is PathStatus.SATISFIED

    def test_follows_path_updates(self):
        source = ManualPathMonitor()
        monitor = ConnectivityMonitor(source)

        source.push(PathStatus.UNSATISFIED)
        assert monitor.current_state() == ConnectivityState(
            is_online=False, detail=PathStatus.UNSATISFIED
        )

        source.push(PathStatus.SATISFIED)
        assert monitor.current_state().is_online is True

    def test_requires_connection_is_offline(self):
        source = ManualPathMonitor()
        monitor = ConnectivityMonitor(source)
        source.push(PathStatus.REQUIRES_CONNECTION)
        assert monitor.current_state().is_online is False
        assert monitor.current_state().detail is PathStatus.REQUIRES_CONNECTION

    def test_initial_status_is_delivered_on_subscribe(self):
        monitor = ConnectivityMonitor(ManualPathMonitor(initial=PathStatus.UNSATISFIED))
        assert monitor.current_state().is_online is False

    def test_published_state_is_immutable(self):
        monitor = ConnectivityMonitor(ManualPathMonitor())
        with pytest.raises(ValidationError):
            monitor.current_state().is_online = False

    def test_earlier_snapshot_is_not_changed_by_updates(self):
        source = ManualPathMonitor()
        monitor = ConnectivityMonitor(source)
        before = monitor.current_state()
        source.push(PathStatus.UNSATISFIED)
        assert before.is_online is True


class TestProbePathMonitor:
    async def test_successful_connect_reports_satisfied(self):
        probe = ProbePathMonitor("api.example.com", 443, timeout=1)
        seen: list[PathStatus] = []
        probe.subscribe(seen.append)
        writer = MagicMock()
        writer.wait_closed = AsyncMock()

        with patch(
            "asyncio.open_connection",
            new_callable=AsyncMock,
            return_value=(MagicMock(), writer),
        ):
            status = await probe.probe()

        assert status is PathStatus.SATISFIED
        assert seen == [PathStatus.SATISFIED]
        writer.close.assert_called_once()

    @pytest.mark.parametrize(
        "error", [ConnectionRefusedError("refused"), OSError("unreachable")]
    )
    async def test_failed_connect_reports_unsatisfied(self, error):
        probe = ProbePathMonitor("api.example.com", 443, timeout=1)
        seen: list[PathStatus] = []
        probe.subscribe(seen.append)

        with patch("asyncio.open_connection", new_callable=AsyncMock, side_effect=error):
            status = await probe.probe()

        assert status is PathStatus.UNSATISFIED
        assert seen == [PathStatus.UNSATISFIED]

    async def test_timeout_reports_unsatisfied(self):
        probe = ProbePathMonitor("api.example.com", 443, timeout=0.01)
        seen: list[PathStatus] = []
        probe.subscribe(seen.append)

        async def never_connects(*_args, **_kwargs):
            await asyncio.sleep(10)

        with patch("asyncio.open_connection", side_effect=never_connects):
            status = await probe.probe()

        assert status is PathStatus.UNSATISFIED

    async def test_start_and_stop_drive_the_monitor(self):
        probe = ProbePathMonitor("api.example.com", 443, interval=0.01, timeout=1)
        monitor = ConnectivityMonitor(probe)

        with patch(
            "asyncio.open_connection",
            new_callable=AsyncMock,
            side_effect=OSError("down"),
        ) as mock_open:
            await probe.start()
            await probe.start()  # idempotent
            for _ in range(100):
                if not monitor.current_state().is_online:
                    break
                await asyncio.sleep(0.01)
            await probe.stop()

        assert mock_open.call_count >= 1
        assert monitor.current_state().detail is PathStatus.UNSATISFIED

    async def test_stop_without_start_is_noop(self):
        await ProbePathMonitor("api.example.com", 443).stop()
