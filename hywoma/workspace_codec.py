"""Mapping between Workspace coordinates and Hyprland's flat workspace id.

    id = (workspace - 1) + 10 * (monitor - 1) + 100 * group + 1

so id 112 is group 1, monitor 2, workspace 3.
"""

from .constants import WORKSPACE_ID_BASE
from .models import Workspace


def decode(workspace_id: int) -> Workspace:
    """Split a Hyprland workspace id into its coordinates.

    Any integer is accepted and mapped digit by digit; the result need not
    name a workspace Hyprland actually has.
    """
    rest = workspace_id - 1
    workspace = rest % WORKSPACE_ID_BASE + 1
    rest //= WORKSPACE_ID_BASE
    monitor = rest % WORKSPACE_ID_BASE + 1
    rest //= WORKSPACE_ID_BASE
    group = rest % WORKSPACE_ID_BASE
    return Workspace(workspace=workspace, monitor=monitor, group=group)


def encode(workspace: Workspace) -> int:
    """Build the Hyprland workspace id for a set of coordinates."""
    return (
        (workspace.workspace - 1)
        + WORKSPACE_ID_BASE * (workspace.monitor - 1)
        + WORKSPACE_ID_BASE ** 2 * workspace.group
        + 1
    )
