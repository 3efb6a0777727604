"""Hyprland event socket reader.

Holds one connection to ``.socket2.sock`` for the daemon's lifetime and
turns active-workspace events into ActiveWorkspaceChanged messages.
"""

import asyncio
import logging
import re
from pathlib import Path
from typing import Optional, Union

from .constants import HyprlandEvent
from .errors import CompositorConnectionError, ErrorCode, ProtocolError, SocketIOError
from .models import ActiveWorkspaceChanged, Message

logger = logging.getLogger(__name__)

EVENT_DELIMITER = ">>"
# Window titles travel on the same stream; allow long lines
EVENT_LINE_LIMIT = 1024 * 1024
UNSIGNED_PATTERN = re.compile(r"\+?[0-9]+")


def parse_unsigned(text: str) -> Optional[int]:
    """Parse a base-10 unsigned integer, or return None.

    Accepts an optional leading ``+``; rejects whitespace, signs and
    values that do not fit in 64 bits.
    """
    if not UNSIGNED_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if value >= 2 ** 64:
        return None
    return value


def parse_event_line(line: str) -> Optional[Message]:
    """Translate one event line into a message.

    Args:
        line: Event line without its trailing newline, ``<event>>><payload>``

    Returns:
        ActiveWorkspaceChanged for workspace-affecting events, None otherwise

    Raises:
        ProtocolError: If the line has no ``>>`` or a workspace id is malformed
    """
    event, delimiter, data = line.partition(EVENT_DELIMITER)
    if not delimiter:
        raise ProtocolError(
            f"Hyprland socket provided a line in an unexpected format: '{line}'",
            code=ErrorCode.MALFORMED_EVENT,
            payload=line,
        )

    if event == HyprlandEvent.WORKSPACE:
        # workspacev2>>WORKSPACEID,WORKSPACENAME
        field_index = 0
    elif event == HyprlandEvent.FOCUSED_MONITOR:
        # focusedmonv2>>MONNAME,WORKSPACEID
        field_index = 1
    else:
        return None

    first, comma, rest = data.partition(",")
    if not comma:
        raise ProtocolError(
            f"{event} payload has no ',' separator: '{data}'",
            code=ErrorCode.MALFORMED_EVENT,
            payload=line,
        )

    raw_id = (first, rest)[field_index]
    workspace_id = parse_unsigned(raw_id)
    if workspace_id is None:
        raise ProtocolError(
            f"{event} carries a non-numeric workspace id: '{raw_id}'",
            code=ErrorCode.MALFORMED_EVENT,
            payload=line,
        )

    return ActiveWorkspaceChanged(workspace_id=workspace_id)


class EventReader:
    """Forwards Hyprland active-workspace events to the dispatcher queue."""

    def __init__(self, socket_path: Union[str, Path], queue: "asyncio.Queue[Message]") -> None:
        """Initialize event reader.

        Args:
            socket_path: Path to Hyprland's ``.socket2.sock``
            queue: Dispatcher message queue
        """
        self.socket_path = Path(socket_path)
        self.queue = queue

    async def run(self) -> None:
        """Read events until the connection fails.

        Never returns normally; end of stream is reported as a lost connection.

        Raises:
            CompositorConnectionError: If the socket cannot be opened or closes
            SocketIOError: If reading or decoding a line fails
            ProtocolError: If a line is malformed
        """
        try:
            reader, writer = await asyncio.open_unix_connection(
                str(self.socket_path), limit=EVENT_LINE_LIMIT
            )
        except OSError as e:
            raise CompositorConnectionError(str(self.socket_path), str(e)) from e

        logger.info(f"Connected to Hyprland event socket {self.socket_path}")

        try:
            while True:
                try:
                    raw = await reader.readline()
                    line = raw.decode("utf-8")
                except (OSError, ValueError) as e:
                    # ValueError covers over-long lines and invalid UTF-8
                    raise SocketIOError("read", str(e)) from e

                if not raw.endswith(b"\n"):
                    raise CompositorConnectionError(
                        str(self.socket_path),
                        "event stream closed by Hyprland",
                        code=ErrorCode.STREAM_CLOSED,
                    )

                message = parse_event_line(line.rstrip("\r\n"))
                if message is None:
                    continue

                logger.debug(f"Event: {line.rstrip()}")
                await self.queue.put(message)
        finally:
            writer.close()
