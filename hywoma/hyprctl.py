"""Hyprland control socket client.

Every request opens a fresh connection to ``.socket.sock``, writes the
command, and reads the reply until Hyprland closes the connection.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import TypeAdapter, ValidationError

from .constants import ACTIVE_WORKSPACE_QUERY, MONITORS_QUERY
from .errors import CompositorConnectionError, ErrorCode, ProtocolError, SocketIOError
from .models import ActiveWorkspaceEntry, MonitorEntry, Workspace
from .workspace_codec import decode

logger = logging.getLogger(__name__)

_monitor_list = TypeAdapter(List[MonitorEntry])


class HyprctlClient:
    """Sends requests to the Hyprland control socket."""

    def __init__(self, socket_path: Union[str, Path]) -> None:
        """Initialize client.

        Args:
            socket_path: Path to Hyprland's ``.socket.sock``
        """
        self.socket_path = Path(socket_path)

    async def call(self, command: str) -> str:
        """Send one raw request and return the full reply.

        Args:
            command: Request text, e.g. ``-j/monitors`` or ``dispatch workspace 3``

        Returns:
            Reply text

        Raises:
            CompositorConnectionError: If the socket cannot be opened
            SocketIOError: If writing the request or reading the reply fails
        """
        try:
            reader, writer = await asyncio.open_unix_connection(str(self.socket_path))
        except OSError as e:
            raise CompositorConnectionError(str(self.socket_path), str(e)) from e

        try:
            try:
                writer.write(command.encode())
                await writer.drain()
            except OSError as e:
                raise SocketIOError("write", str(e)) from e

            try:
                data = await reader.read()
            except OSError as e:
                raise SocketIOError("read", str(e)) from e
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError:
                # Peer already gone; the reply (or the error above) is what matters
                pass

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SocketIOError("read", f"reply is not UTF-8: {e}") from e

    async def query_monitors_sorted_by_x(self) -> List[int]:
        """Return Hyprland monitor ids ordered left to right.

        Monitors sharing an x position keep Hyprland's order.

        Raises:
            ProtocolError: If the reply is not a list of ``{id, x}`` records
        """
        reply = await self.call(MONITORS_QUERY)
        try:
            monitors = _monitor_list.validate_json(reply)
        except ValidationError as e:
            raise ProtocolError(
                f"Unexpected {MONITORS_QUERY} reply: {e.error_count()} validation errors",
                payload=reply,
            ) from e

        return [monitor.id for monitor in sorted(monitors, key=lambda m: m.x)]

    async def query_active_workspace(self) -> Workspace:
        """Return the coordinates of the currently active workspace.

        Raises:
            ProtocolError: If the reply is not JSON or lacks a non-negative numeric ``id``
        """
        reply = await self.call(ACTIVE_WORKSPACE_QUERY)
        try:
            parsed = json.loads(reply)
        except json.JSONDecodeError as e:
            raise ProtocolError(f"Unexpected {ACTIVE_WORKSPACE_QUERY} reply: {e}", payload=reply) from e

        try:
            entry = ActiveWorkspaceEntry.model_validate(parsed)
        except ValidationError as e:
            raise ProtocolError(
                f"{ACTIVE_WORKSPACE_QUERY} reply has no non-negative numeric 'id' field",
                code=ErrorCode.MISSING_FIELD,
                payload=reply,
            ) from e

        return decode(entry.id)

    async def dispatch(self, dispatcher: str, *args: Union[str, int]) -> None:
        """Send a ``dispatch`` command, draining and ignoring the acknowledgement.

        Args:
            dispatcher: Hyprland dispatcher name, e.g. ``workspace``
            *args: Dispatcher arguments, joined with spaces
        """
        command = " ".join(["dispatch", dispatcher, *(str(arg) for arg in args)])
        reply = await self.call(command)
        if reply.strip() != "ok":
            logger.debug(f"Hyprland replied to '{command}': {reply.strip()!r}")
