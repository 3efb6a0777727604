"""Socket path configuration for hywoma.

All paths derive from two environment values set by Hyprland for every
process in the session: ``XDG_RUNTIME_DIR`` and ``HYPRLAND_INSTANCE_SIGNATURE``.
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .constants import EnvVars, SocketNames
from .errors import ConfigError

logger = logging.getLogger(__name__)


def _require(environ: Mapping[str, str], variable: str) -> str:
    value = environ.get(variable)
    if not value:
        raise ConfigError(variable)
    return value


def command_socket_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Resolve the hywoma command socket path.

    Only needs ``XDG_RUNTIME_DIR``, so clients work without the Hyprland
    instance signature.

    Raises:
        ConfigError: If XDG_RUNTIME_DIR is missing or empty
    """
    if environ is None:
        environ = os.environ
    return Path(_require(environ, EnvVars.RUNTIME_DIR)) / SocketNames.COMMAND


class HywomaPaths(BaseModel):
    """Resolved socket locations for one Hyprland instance."""

    model_config = ConfigDict(frozen=True)

    runtime_dir: Path
    instance_signature: str

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HywomaPaths":
        """Build paths from the process environment.

        Args:
            environ: Environment mapping (defaults to os.environ)

        Returns:
            Resolved HywomaPaths

        Raises:
            ConfigError: If a required variable is missing or empty
        """
        if environ is None:
            environ = os.environ

        paths = cls(
            runtime_dir=Path(_require(environ, EnvVars.RUNTIME_DIR)),
            instance_signature=_require(environ, EnvVars.INSTANCE_SIGNATURE),
        )
        logger.debug(f"Resolved Hyprland socket directory: {paths.hyprland_dir}")
        return paths

    @property
    def command_socket(self) -> Path:
        return self.runtime_dir / SocketNames.COMMAND

    @property
    def hyprland_dir(self) -> Path:
        return self.runtime_dir / SocketNames.HYPRLAND_DIR / self.instance_signature

    @property
    def control_socket(self) -> Path:
        return self.hyprland_dir / SocketNames.HYPRLAND_CONTROL

    @property
    def event_socket(self) -> Path:
        return self.hyprland_dir / SocketNames.HYPRLAND_EVENTS
