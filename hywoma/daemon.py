"""hywoma daemon supervisor.

Runs the event reader, the command listener and the dispatcher as asyncio
tasks sharing one queue. The first unit to fail ends the daemon with the
exit status assigned to that unit (see ExitStatus).
"""

import asyncio
import logging
import os
import sys
from typing import Awaitable, Dict, Mapping, Optional

try:
    from systemd import journal
    SYSTEMD_AVAILABLE = True
except ImportError:
    SYSTEMD_AVAILABLE = False

from .command_listener import CommandListener
from .config import HywomaPaths
from .constants import EnvVars, ExitStatus
from .dispatcher import Dispatcher
from .errors import ConfigError, HywomaError
from .event_reader import EventReader
from .hyprctl import HyprctlClient
from .models import Message

logger = logging.getLogger(__name__)


async def supervise(units: Mapping[ExitStatus, Awaitable[None]]) -> ExitStatus:
    """Run units concurrently until the first one finishes.

    Units are expected to run forever, so finishing at all (by raising or
    by returning) counts as a failure of that unit. The remaining units are
    cancelled.

    Args:
        units: Coroutine per exit status to report if it finishes first

    Returns:
        Exit status of the first unit to finish
    """
    tasks: Dict[asyncio.Task, ExitStatus] = {
        asyncio.create_task(unit, name=status.name.lower()): status
        for status, unit in units.items()
    }

    try:
        done, _ = await asyncio.wait(list(tasks), return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    # Lowest status wins if several units died in the same iteration
    finished = sorted(done, key=lambda task: tasks[task])
    for task in finished:
        if task.cancelled():
            logger.error(f"{task.get_name()} was cancelled")
            continue
        error = task.exception()
        if error is not None:
            logger.error(f"{task.get_name()} failed: {error}", exc_info=error)
            if isinstance(error, HywomaError):
                logger.error(f"{task.get_name()} error details: {error.to_dict()}")
        else:
            logger.error(f"{task.get_name()} stopped unexpectedly")

    return tasks[finished[0]]


class HywomaDaemon:
    """Wires the three units of the daemon together."""

    def __init__(self, paths: HywomaPaths) -> None:
        """Initialize daemon.

        Args:
            paths: Resolved socket paths
        """
        self.paths = paths
        self.queue: "asyncio.Queue[Message]" = asyncio.Queue()
        self.client = HyprctlClient(paths.control_socket)
        self.event_reader = EventReader(paths.event_socket, self.queue)
        self.command_listener = CommandListener(paths.command_socket, self.queue)
        self.dispatcher = Dispatcher(self.client, self.queue)

    async def run(self) -> ExitStatus:
        """Run until one unit fails.

        Returns:
            Exit status identifying the failed unit
        """
        logger.info(f"Hyprland sockets: {self.paths.hyprland_dir}")
        return await supervise({
            ExitStatus.EVENT_READER: self.event_reader.run(),
            ExitStatus.COMMAND_LISTENER: self.command_listener.run(),
            ExitStatus.DISPATCHER: self.dispatcher.run(),
        })


def setup_logging() -> None:
    """Setup logging to systemd journal or stderr."""
    log_level = os.environ.get(EnvVars.LOG_LEVEL, "INFO").upper()

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if SYSTEMD_AVAILABLE:
        handler = journal.JournalHandler(SYSLOG_IDENTIFIER="hywoma")
    else:
        handler = logging.StreamHandler(sys.stderr)

    formatter = logging.Formatter(
        "%(levelname)s [%(name)s] %(message)s"
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logger.debug(f"Logging configured: level={log_level}")


async def main_async(environ: Optional[Mapping[str, str]] = None) -> int:
    """Async main function.

    Returns:
        Exit code (see ExitStatus)
    """
    try:
        paths = HywomaPaths.from_env(environ)
    except ConfigError as e:
        logger.error(f"Configuration error: {e.message}")
        return ExitStatus.CONFIG

    daemon = HywomaDaemon(paths)
    return await daemon.run()


def main() -> None:
    """Daemon entry point."""
    setup_logging()

    logger.info("hywoma daemon starting...")
    logger.info(f"PID: {os.getpid()}")

    try:
        exit_code = asyncio.run(main_async())
        sys.exit(int(exit_code))

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(ExitStatus.OK)
