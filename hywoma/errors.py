"""
Error taxonomy for hywoma.

Every failure inside the event reader, the command listener or the
dispatcher is one of these and is fatal to the unit that raised it.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for hywoma.

    Codes are grouped by family:
    - 1000-1099: Socket connection errors
    - 1100-1199: Socket read/write errors
    - 1200-1299: Wire format errors (Hyprland side)
    - 1300-1399: Command envelope errors (client side)
    - 1400-1499: Configuration errors
    - 1500-1599: Dispatcher state errors
    """

    # Socket connection errors (1000-1099)
    SOCKET_CONNECT_FAILED = 1000
    STREAM_CLOSED = 1001

    # Socket read/write errors (1100-1199)
    SOCKET_IO_FAILED = 1100

    # Wire format errors (1200-1299)
    MALFORMED_EVENT = 1200
    MALFORMED_RESPONSE = 1201
    MISSING_FIELD = 1202

    # Command envelope errors (1300-1399)
    MALFORMED_ENVELOPE = 1300

    # Configuration errors (1400-1499)
    MISSING_ENVIRONMENT = 1400

    # Dispatcher state errors (1500-1599)
    MONITOR_OUT_OF_RANGE = 1500


class HywomaError(Exception):
    """Base exception for hywoma errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize hywoma error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for diagnostics.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class CompositorConnectionError(HywomaError, ConnectionError):
    """A socket could not be opened, or a persistent stream was lost."""

    def __init__(self, socket_path: str, reason: str, code: ErrorCode = ErrorCode.SOCKET_CONNECT_FAILED,
                 suggestion: Optional[str] = None):
        """
        Initialize connection error.

        Args:
            socket_path: Path of the Unix socket
            reason: Reason for failure
            code: SOCKET_CONNECT_FAILED or STREAM_CLOSED
            suggestion: Recovery suggestion
        """
        super().__init__(
            code=code,
            message=f"Connection to {socket_path} failed: {reason}",
            suggestion=suggestion or "Ensure Hyprland is running and its sockets are accessible",
            context={"socket_path": socket_path, "reason": reason}
        )


class SocketIOError(HywomaError):
    """Read or write failure on an open socket."""

    def __init__(self, operation: str, reason: str):
        """
        Initialize socket IO error.

        Args:
            operation: "read" or "write"
            reason: Reason for failure
        """
        super().__init__(
            code=ErrorCode.SOCKET_IO_FAILED,
            message=f"Socket {operation} failed: {reason}",
            context={"operation": operation, "reason": reason}
        )


class ProtocolError(HywomaError):
    """Data received from Hyprland does not have the expected shape."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.MALFORMED_RESPONSE,
                 payload: Optional[str] = None):
        context = {}
        if payload is not None:
            context["payload"] = payload
        super().__init__(code=code, message=message, context=context)


class EnvelopeDecodeError(HywomaError):
    """A client wrote bytes that are not a serialized command."""

    def __init__(self, reason: str, size: int):
        super().__init__(
            code=ErrorCode.MALFORMED_ENVELOPE,
            message=f"Malformed command envelope ({size} bytes): {reason}",
            suggestion="Send commands with the hywoma client",
            context={"reason": reason, "size": size}
        )


class ConfigError(HywomaError):
    """A required environment value is missing."""

    def __init__(self, variable: str):
        super().__init__(
            code=ErrorCode.MISSING_ENVIRONMENT,
            message=f"Required environment variable {variable} is not set",
            suggestion="Run hywoma from inside a Hyprland session",
            context={"variable": variable}
        )


class MonitorIndexError(HywomaError, IndexError):
    """A monitor position does not exist in the sorted monitor list."""

    def __init__(self, position: int, monitor_count: int):
        """
        Initialize monitor index error.

        Args:
            position: Requested monitor position
            monitor_count: Number of monitors known at startup
        """
        super().__init__(
            code=ErrorCode.MONITOR_OUT_OF_RANGE,
            message=f"Monitor position {position} out of range ({monitor_count} monitors)",
            suggestion="Monitor positions are 0-based, ordered left to right",
            context={"position": position, "monitor_count": monitor_count}
        )
