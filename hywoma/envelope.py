"""Binary envelope for commands sent over the hywoma command socket.

A command is a list of strings, serialized as a little-endian u64 element
count followed by, per element, a little-endian u64 byte length and the
UTF-8 bytes. This is the layout bincode 1.x produces for ``Vec<String>``,
so older clients keep working.
"""

import struct
from typing import List, Sequence

from .errors import EnvelopeDecodeError

length_struct = struct.Struct("<Q")


def encode_command(command: Sequence[str]) -> bytes:
    """Serialize a command for the command socket."""
    parts = [length_struct.pack(len(command))]
    for element in command:
        raw = element.encode("utf-8")
        parts.append(length_struct.pack(len(raw)))
        parts.append(raw)
    return b"".join(parts)


def decode_command(data: bytes) -> List[str]:
    """Deserialize a command read from the command socket.

    Bytes after the last element are ignored.

    Raises:
        EnvelopeDecodeError: If the buffer is truncated or not UTF-8
    """
    view = memoryview(data)
    offset = 0

    def read_length() -> int:
        nonlocal offset
        if offset + length_struct.size > len(view):
            raise EnvelopeDecodeError(f"truncated length field at offset {offset}", len(data))
        (value,) = length_struct.unpack_from(view, offset)
        offset += length_struct.size
        return value

    count = read_length()
    command = []
    for index in range(count):
        size = read_length()
        if offset + size > len(view):
            raise EnvelopeDecodeError(
                f"element {index} declares {size} bytes, {len(view) - offset} available", len(data)
            )
        try:
            command.append(bytes(view[offset:offset + size]).decode("utf-8"))
        except UnicodeDecodeError as e:
            raise EnvelopeDecodeError(f"element {index} is not UTF-8: {e}", len(data)) from e
        offset += size

    return command
