"""Unix socket server for hywoma client commands.

Connections are handled one at a time: each is read to EOF, decoded and
closed before the next one is accepted. Clients must connect, send one
command and close. Nothing is ever written back.
"""

import asyncio
import logging
import socket
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

from .constants import ClientCommand
from .envelope import decode_command
from .errors import CompositorConnectionError, SocketIOError
from .event_reader import parse_unsigned
from .models import Message, MoveToMonitor, MoveToWorkspace, SelectMonitor, SelectWorkspace

logger = logging.getLogger(__name__)

# Seconds to wait when checking for a live server at the socket path
LIVENESS_TIMEOUT = 1.0

# Command name -> message constructor taking the single numeric argument
COMMAND_MESSAGES: Dict[str, Callable[[int], Message]] = {
    ClientCommand.SELECT_WORKSPACE: lambda n: SelectWorkspace(workspace=n),
    ClientCommand.MOVE_TO_WORKSPACE: lambda n: MoveToWorkspace(workspace=n),
    ClientCommand.SELECT_MONITOR: lambda p: SelectMonitor(position=p),
    ClientCommand.MOVE_TO_MONITOR: lambda p: MoveToMonitor(position=p),
}


def command_to_message(command: Sequence[str]) -> Optional[Message]:
    """Map a decoded command to a message.

    Returns None for unknown names, wrong arity or a non-numeric argument.
    """
    if len(command) != 2:
        return None

    name, argument = command
    build = COMMAND_MESSAGES.get(name)
    if build is None:
        return None

    value = parse_unsigned(argument)
    if value is None:
        return None

    return build(value)


class CommandListener:
    """Accepts client commands and forwards them to the dispatcher queue."""

    def __init__(self, socket_path: Union[str, Path], queue: "asyncio.Queue[Message]") -> None:
        """Initialize command listener.

        Args:
            socket_path: Path to bind the command socket at
            queue: Dispatcher message queue
        """
        self.socket_path = Path(socket_path)
        self.queue = queue
        self.server_socket: Optional[socket.socket] = None

    def socket_in_use(self) -> bool:
        """Check whether a live server is accepting on the socket path.

        A refused connection, a missing path or a non-socket file means the
        path is stale. The check reaches a live server as an empty connection.
        """
        if not self.socket_path.is_socket():
            return False

        check = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        check.settimeout(LIVENESS_TIMEOUT)
        try:
            check.connect(str(self.socket_path))
        except (ConnectionRefusedError, FileNotFoundError):
            return False
        finally:
            check.close()
        return True

    def bind(self) -> socket.socket:
        """Bind and listen on the command socket.

        A stale file at the path is removed first.

        Raises:
            CompositorConnectionError: If another server owns the path or binding fails
        """
        try:
            in_use = self.socket_in_use()
        except OSError as e:
            raise CompositorConnectionError(
                str(self.socket_path), f"cannot check command socket: {e}",
            ) from e
        if in_use:
            raise CompositorConnectionError(
                str(self.socket_path), "another hywoma server is running",
                suggestion="Stop the running hywoma server first",
            )

        self.socket_path.unlink(missing_ok=True)

        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.bind(str(self.socket_path))
            sock.listen()
        except OSError as e:
            sock.close()
            raise CompositorConnectionError(
                str(self.socket_path), f"cannot bind command socket: {e}",
                suggestion="Check that no other hywoma server is running",
            ) from e
        sock.setblocking(False)

        self.server_socket = sock
        logger.info(f"Command socket listening on {self.socket_path}")
        return sock

    async def run(self) -> None:
        """Serve connections until a fatal error.

        Connections that close without sending anything are skipped.

        Raises:
            CompositorConnectionError: If binding fails
            SocketIOError: If accepting or reading a connection fails
            EnvelopeDecodeError: If a client sends a malformed envelope
        """
        sock = self.server_socket or self.bind()
        loop = asyncio.get_running_loop()

        try:
            while True:
                try:
                    conn, _ = await loop.sock_accept(sock)
                except OSError as e:
                    raise SocketIOError("accept", str(e)) from e

                data = await self._read_connection(conn)
                if not data:
                    logger.debug("Skipping empty connection")
                    continue

                command = decode_command(data)
                logger.debug(f"Received command: {command}")
                await self.process_command(command)
        finally:
            sock.close()
            self.server_socket = None

    async def _read_connection(self, conn: socket.socket) -> bytes:
        """Read one connection to EOF and close it."""
        try:
            reader, writer = await asyncio.open_unix_connection(sock=conn)
            try:
                return await reader.read()
            finally:
                writer.close()
                try:
                    await writer.wait_closed()
                except OSError:
                    # Client may already have reset its end
                    pass
        except OSError as e:
            raise SocketIOError("read", str(e)) from e
        finally:
            conn.close()

    async def process_command(self, command: List[str]) -> None:
        """Forward a decoded command, silently dropping invalid ones."""
        message = command_to_message(command)
        if message is None:
            logger.debug(f"Ignoring invalid command: {command}")
            return
        await self.queue.put(message)
