"""Message dispatcher: the single consumer of the hywoma message queue.

Owns the monitor order and the active workspace, and turns each message
into at most one Hyprland dispatch command.
"""

import asyncio
import logging
from typing import List, Optional

from .errors import MonitorIndexError
from .hyprctl import HyprctlClient
from .models import (
    ActiveWorkspaceChanged,
    Message,
    MoveToMonitor,
    MoveToWorkspace,
    SelectMonitor,
    SelectWorkspace,
    Workspace,
)
from .workspace_codec import decode, encode

logger = logging.getLogger(__name__)


class Dispatcher:
    """Applies queued messages to Hyprland.

    ``monitor_ids`` is fixed after startup. ``active_workspace`` follows
    Hyprland's workspace events and is also updated optimistically by
    SelectWorkspace, ahead of the event Hyprland sends for the switch.
    Neither is shared with the reader tasks.
    """

    def __init__(self, client: HyprctlClient, queue: "asyncio.Queue[Message]") -> None:
        """Initialize dispatcher.

        Args:
            client: Hyprland control socket client
            queue: Message queue fed by the event reader and command listener
        """
        self.client = client
        self.queue = queue
        self.monitor_ids: List[int] = []
        self.active_workspace: Optional[Workspace] = None

    async def start(self) -> None:
        """Fetch monitor order and active workspace from Hyprland.

        Raises:
            HywomaError: If either query fails
        """
        self.monitor_ids = await self.client.query_monitors_sorted_by_x()
        self.active_workspace = await self.client.query_active_workspace()
        logger.info(f"Sorted monitor ids: {self.monitor_ids}")
        logger.info(f"Initial workspace: {self.active_workspace}")

    async def run(self) -> None:
        """Start, then process messages in arrival order forever.

        Raises:
            HywomaError: On any startup, Hyprland or monitor index failure
        """
        await self.start()
        while True:
            message = await self.queue.get()
            try:
                await self.handle(message)
            finally:
                self.queue.task_done()

    async def handle(self, message: Message) -> None:
        """Apply a single message."""
        logger.debug(f"Msg: {message!r}")

        if isinstance(message, ActiveWorkspaceChanged):
            self.active_workspace = decode(message.workspace_id)
            logger.info(f"Workspace update: {self.active_workspace}")

        elif isinstance(message, SelectWorkspace):
            self.active_workspace.workspace = message.workspace
            await self.client.dispatch("workspace", encode(self.active_workspace))

        elif isinstance(message, MoveToWorkspace):
            target = self.active_workspace.model_copy(update={"workspace": message.workspace})
            await self.client.dispatch("movetoworkspacesilent", encode(target))

        elif isinstance(message, SelectMonitor):
            monitor_id = self.monitor_at(message.position)
            await self.client.dispatch("focusmonitor", monitor_id)

        elif isinstance(message, MoveToMonitor):
            monitor_id = self.monitor_at(message.position)
            await self.client.dispatch("movewindow", f"mon:{monitor_id}", "silent")

        else:
            raise TypeError(f"Unknown message type: {type(message).__name__}")

    def monitor_at(self, position: int) -> int:
        """Return the Hyprland monitor id at a left-to-right position.

        Raises:
            MonitorIndexError: If there is no monitor at ``position``
        """
        if not 0 <= position < len(self.monitor_ids):
            raise MonitorIndexError(position, len(self.monitor_ids))
        return self.monitor_ids[position]
