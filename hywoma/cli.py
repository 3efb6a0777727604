#!/usr/bin/env python3
"""
hywoma CLI

``hywoma server`` runs the daemon; any other invocation is sent to the
running daemon as a command, e.g. ``hywoma select_workspace 3``.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from .client import send_command
from .config import command_socket_path
from .constants import ClientCommand
from .errors import HywomaError

SERVER_COMMAND = "server"


class HywomaCLI:
    """Command-line front end for the daemon and its command socket."""

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description="Hyprland workspace manager",
            prog="hywoma",
            epilog=(
                "commands: server, "
                f"{ClientCommand.SELECT_WORKSPACE} N, {ClientCommand.MOVE_TO_WORKSPACE} N, "
                f"{ClientCommand.SELECT_MONITOR} POS, {ClientCommand.MOVE_TO_MONITOR} POS"
            ),
        )
        parser.add_argument("command", help="'server' or a command for the running daemon")
        parser.add_argument("arguments", nargs=argparse.REMAINDER, help="Command arguments")
        return parser

    async def cmd_send(self, command: List[str]) -> int:
        """Send a command to the daemon."""
        await send_command(command_socket_path(), command)
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run CLI."""
        args = self.build_parser().parse_args(argv)

        if args.command == SERVER_COMMAND:
            from .daemon import main as daemon_main
            daemon_main()
            return 0

        try:
            return asyncio.run(self.cmd_send([args.command, *args.arguments]))
        except KeyboardInterrupt:
            print("\nInterrupted", file=sys.stderr)
            return 130
        except HywomaError as e:
            print(f"❌ Error: {e.message}", file=sys.stderr)
            if e.suggestion:
                print(f"  → {e.suggestion}", file=sys.stderr)
            return 1


def main():
    """Main entry point."""
    cli = HywomaCLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
