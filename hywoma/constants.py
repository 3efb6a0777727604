"""Socket names, command names and exit statuses shared across hywoma.

Single source of truth for the names the daemon and its clients agree on.
"""

from enum import IntEnum
from typing import Final


class SocketNames:
    """File names of the sockets hywoma talks to.

    The command socket lives directly under ``$XDG_RUNTIME_DIR``; the two
    Hyprland sockets live under ``$XDG_RUNTIME_DIR/hypr/<signature>``.
    """

    COMMAND: Final[str] = ".hywoma.sock"
    HYPRLAND_DIR: Final[str] = "hypr"
    HYPRLAND_CONTROL: Final[str] = ".socket.sock"
    HYPRLAND_EVENTS: Final[str] = ".socket2.sock"


class EnvVars:
    """Environment variables required to locate the sockets."""

    RUNTIME_DIR: Final[str] = "XDG_RUNTIME_DIR"
    INSTANCE_SIGNATURE: Final[str] = "HYPRLAND_INSTANCE_SIGNATURE"
    LOG_LEVEL: Final[str] = "LOG_LEVEL"


class ClientCommand:
    """Command names accepted on the command socket."""

    SELECT_WORKSPACE: Final[str] = "select_workspace"
    MOVE_TO_WORKSPACE: Final[str] = "move_to_workspace"
    SELECT_MONITOR: Final[str] = "select_monitor"
    MOVE_TO_MONITOR: Final[str] = "move_to_monitor"


class HyprlandEvent:
    """Event names on the Hyprland event socket that change the active workspace."""

    WORKSPACE: Final[str] = "workspacev2"
    FOCUSED_MONITOR: Final[str] = "focusedmonv2"


class ExitStatus(IntEnum):
    """Process exit status per failing unit.

    1 and 2 keep the values operators already know from earlier releases.
    """

    OK = 0
    EVENT_READER = 1
    COMMAND_LISTENER = 2
    DISPATCHER = 3
    CONFIG = 4


# Digits per coordinate in a Hyprland workspace id (group/monitor/workspace)
WORKSPACE_ID_BASE: Final[int] = 10

# Hyprland control socket queries
MONITORS_QUERY: Final[str] = "-j/monitors"
ACTIVE_WORKSPACE_QUERY: Final[str] = "-j/activeworkspace"
