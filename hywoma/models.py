"""
Pydantic data models for hywoma.

Workspace coordinates, the two Hyprland query records we consume, and the
closed set of messages passed from the readers to the dispatcher.
"""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


class Workspace(BaseModel):
    """A Hyprland workspace split into group/monitor/workspace coordinates.

    ``workspace`` and ``monitor`` are 1-based, ``group`` is 0-based.
    Values are not range-checked: ids are mapped mechanically.
    """

    workspace: int = Field(..., description="Workspace slot on the monitor (1-based)")
    monitor: int = Field(..., description="Monitor slot within the group (1-based)")
    group: int = Field(0, description="Workspace group (0-based)")


# Hyprland query records

class MonitorEntry(BaseModel):
    """One element of the ``-j/monitors`` response."""

    model_config = ConfigDict(extra="ignore")

    id: NonNegativeInt
    x: int


class ActiveWorkspaceEntry(BaseModel):
    """The ``-j/activeworkspace`` response."""

    model_config = ConfigDict(extra="ignore")

    id: NonNegativeInt


# Messages

class ActiveWorkspaceChanged(BaseModel):
    """Hyprland reports a new active workspace."""

    model_config = ConfigDict(frozen=True)

    workspace_id: int


class SelectWorkspace(BaseModel):
    """Switch to workspace slot ``workspace`` on the active monitor and group."""

    model_config = ConfigDict(frozen=True)

    workspace: int


class MoveToWorkspace(BaseModel):
    """Move the focused window to workspace slot ``workspace`` without following it."""

    model_config = ConfigDict(frozen=True)

    workspace: int


class SelectMonitor(BaseModel):
    """Focus the monitor at ``position`` in the left-to-right monitor order."""

    model_config = ConfigDict(frozen=True)

    position: int


class MoveToMonitor(BaseModel):
    """Move the focused window to the monitor at ``position``."""

    model_config = ConfigDict(frozen=True)

    position: int


Message = Union[
    ActiveWorkspaceChanged,
    SelectWorkspace,
    MoveToWorkspace,
    SelectMonitor,
    MoveToMonitor,
]
