"""Tests for the message dispatcher."""

import asyncio
from unittest.mock import AsyncMock, call

import pytest

from hywoma.dispatcher import Dispatcher
from hywoma.errors import MonitorIndexError, SocketIOError
from hywoma.hyprctl import HyprctlClient
from hywoma.models import (
    ActiveWorkspaceChanged,
    MoveToMonitor,
    MoveToWorkspace,
    SelectMonitor,
    SelectWorkspace,
    Workspace,
)
from hywoma.workspace_codec import encode

from .fakes import FakeHyprlandControl


@pytest.fixture
def mock_client():
    """Hyprland client with three monitors and workspace 2 of monitor 1 active."""
    client = AsyncMock(spec=HyprctlClient)
    client.query_monitors_sorted_by_x.return_value = [10, 20, 30]
    client.query_active_workspace.return_value = Workspace(workspace=2, monitor=1, group=0)
    return client


@pytest.fixture
def dispatcher(mock_client):
    return Dispatcher(mock_client, asyncio.Queue())


class TestStartup:
    """Test startup queries."""

    @pytest.mark.asyncio
    async def test_start_loads_state(self, dispatcher):
        await dispatcher.start()
        assert dispatcher.monitor_ids == [10, 20, 30]
        assert dispatcher.active_workspace == Workspace(workspace=2, monitor=1, group=0)

    @pytest.mark.asyncio
    async def test_startup_failure_is_fatal(self, dispatcher, mock_client):
        mock_client.query_monitors_sorted_by_x.side_effect = SocketIOError("read", "reset")
        with pytest.raises(SocketIOError):
            await dispatcher.run()


class TestHandle:
    """Test per-message behaviour."""

    @pytest.mark.asyncio
    async def test_active_workspace_changed(self, dispatcher, mock_client):
        await dispatcher.start()
        await dispatcher.handle(ActiveWorkspaceChanged(workspace_id=112))

        assert dispatcher.active_workspace == Workspace(workspace=3, monitor=2, group=1)
        mock_client.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_select_workspace_updates_state_optimistically(self, dispatcher, mock_client):
        """The stored workspace changes before Hyprland confirms the switch."""
        await dispatcher.start()
        await dispatcher.handle(SelectWorkspace(workspace=5))

        expected_id = encode(Workspace(workspace=5, monitor=1, group=0))
        mock_client.dispatch.assert_awaited_once_with("workspace", expected_id)
        assert dispatcher.active_workspace == Workspace(workspace=5, monitor=1, group=0)

    @pytest.mark.asyncio
    async def test_select_workspace_keeps_monitor_and_group(self, dispatcher, mock_client):
        await dispatcher.start()
        await dispatcher.handle(ActiveWorkspaceChanged(workspace_id=112))
        await dispatcher.handle(SelectWorkspace(workspace=7))

        mock_client.dispatch.assert_awaited_once_with("workspace", 117)

    @pytest.mark.asyncio
    async def test_move_to_workspace_does_not_mutate(self, dispatcher, mock_client):
        await dispatcher.start()
        await dispatcher.handle(MoveToWorkspace(workspace=4))

        mock_client.dispatch.assert_awaited_once_with("movetoworkspacesilent", 4)
        assert dispatcher.active_workspace == Workspace(workspace=2, monitor=1, group=0)

    @pytest.mark.asyncio
    async def test_select_monitor_uses_sorted_position(self, dispatcher, mock_client):
        await dispatcher.start()
        await dispatcher.handle(SelectMonitor(position=0))
        await dispatcher.handle(SelectMonitor(position=2))

        assert mock_client.dispatch.await_args_list == [
            call("focusmonitor", 10),
            call("focusmonitor", 30),
        ]

    @pytest.mark.asyncio
    async def test_move_to_monitor(self, dispatcher, mock_client):
        await dispatcher.start()
        await dispatcher.handle(MoveToMonitor(position=1))

        mock_client.dispatch.assert_awaited_once_with("movewindow", "mon:20", "silent")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", [SelectMonitor(position=3), MoveToMonitor(position=3)])
    async def test_monitor_out_of_range_is_fatal(self, dispatcher, mock_client, message):
        await dispatcher.start()
        with pytest.raises(MonitorIndexError) as exc_info:
            await dispatcher.handle(message)

        assert isinstance(exc_info.value, IndexError)
        assert exc_info.value.context == {"position": 3, "monitor_count": 3}
        mock_client.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_dispatch_failure_ends_run(self, dispatcher, mock_client):
        """A failing Hyprland command terminates the dispatcher loop."""
        mock_client.dispatch.side_effect = SocketIOError("write", "broken pipe")
        await dispatcher.queue.put(SelectWorkspace(workspace=1))

        with pytest.raises(SocketIOError):
            await asyncio.wait_for(dispatcher.run(), timeout=5)


class TestQueue:
    """Test queue consumption."""

    @pytest.mark.asyncio
    async def test_two_producers_one_consumer(self, dispatcher, mock_client):
        """Every message from both producers is handled exactly once."""
        n = 50
        handled = []
        original_handle = dispatcher.handle

        async def recording_handle(message):
            handled.append(message)
            await original_handle(message)

        dispatcher.handle = recording_handle

        async def events():
            for i in range(n):
                await dispatcher.queue.put(ActiveWorkspaceChanged(workspace_id=i + 1))
                await asyncio.sleep(0)

        async def commands():
            for i in range(n):
                await dispatcher.queue.put(MoveToWorkspace(workspace=i % 10 + 1))
                await asyncio.sleep(0)

        consumer = asyncio.create_task(dispatcher.run())
        try:
            await asyncio.gather(events(), commands())
            await asyncio.wait_for(dispatcher.queue.join(), timeout=5)
        finally:
            consumer.cancel()
            await asyncio.gather(consumer, return_exceptions=True)

        assert len(handled) == 2 * n
        assert sorted(m.workspace_id for m in handled if isinstance(m, ActiveWorkspaceChanged)) == list(range(1, n + 1))
        assert mock_client.dispatch.await_count == n

    @pytest.mark.asyncio
    async def test_against_fake_hyprland(self, paths, monitors_json, active_workspace_json):
        """Dispatcher drives a fake control socket end to end."""
        fake = await FakeHyprlandControl(paths.control_socket, {
            "-j/monitors": monitors_json,
            "-j/activeworkspace": active_workspace_json,
        }).start()
        queue = asyncio.Queue()
        dispatcher = Dispatcher(HyprctlClient(paths.control_socket), queue)
        consumer = asyncio.create_task(dispatcher.run())

        try:
            for message in [
                SelectWorkspace(workspace=5),
                SelectMonitor(position=1),
                MoveToMonitor(position=2),
                ActiveWorkspaceChanged(workspace_id=23),
                MoveToWorkspace(workspace=1),
            ]:
                await queue.put(message)
            await asyncio.wait_for(queue.join(), timeout=5)
        finally:
            consumer.cancel()
            await asyncio.gather(consumer, return_exceptions=True)
            await fake.stop()

        assert fake.dispatches == [
            "dispatch workspace 5",
            "dispatch focusmonitor 20",
            "dispatch movewindow mon:30 silent",
            "dispatch movetoworkspacesilent 21",
        ]
