"""Client side of the hywoma command socket.

Sends one command per connection and closes; the daemon never replies.
"""

import asyncio
import logging
from pathlib import Path
from typing import Sequence, Union

from .envelope import encode_command
from .errors import CompositorConnectionError, SocketIOError

logger = logging.getLogger(__name__)


async def send_command(socket_path: Union[str, Path], command: Sequence[str]) -> None:
    """Send a command to a running hywoma daemon.

    Args:
        socket_path: Path to the hywoma command socket
        command: Command name followed by its arguments

    Raises:
        CompositorConnectionError: If the daemon socket cannot be opened
        SocketIOError: If writing the command fails
    """
    try:
        _, writer = await asyncio.open_unix_connection(str(socket_path))
    except OSError as e:
        raise CompositorConnectionError(
            str(socket_path), str(e),
            suggestion="Start the daemon with: hywoma server",
        ) from e

    try:
        writer.write(encode_command(command))
        await writer.drain()
    except OSError as e:
        raise SocketIOError("write", str(e)) from e
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            # Daemon closes its end as soon as it has read to EOF
            pass

    logger.debug(f"Sent command: {list(command)}")
