"""
hywoma

Hyprland workspace manager daemon.
Translates group/monitor/workspace navigation commands from short-lived
clients into Hyprland dispatch commands.
"""

__version__ = "0.1.0"
