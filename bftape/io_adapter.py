"""
Byte-level I/O used by the '.' and ',' instructions.

A sink takes one byte at a time and flushes it straight away, so output
order always matches execution order. A source hands back one byte at a
time, or None once the input is exhausted.
"""

import sys
from typing import List, Optional, Union

from .errors import OutputDeviceError


class ByteSink:
    def write_byte(self, value: int) -> None:
        raise NotImplementedError


class ByteSource:
    def read_byte(self) -> Optional[int]:
        raise NotImplementedError


class StdoutSink(ByteSink):
    """Raw bytes to the process's standard output."""

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdout.buffer

    def write_byte(self, value: int) -> None:
        try:
            self.stream.write(bytes((value,)))
            self.stream.flush()
        except (OSError, ValueError) as e:
            raise OutputDeviceError(f"failed to write output byte {value}: {e}") from e


class StdinSource(ByteSource):
    """Raw bytes from the process's standard input, one blocking read at a time."""

    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdin.buffer

    def read_byte(self) -> Optional[int]:
        try:
            data = self.stream.read(1)
        except (OSError, ValueError):
            # A failed read counts as end of input
            return None
        if not data:
            return None
        return data[0]


class BufferSink(ByteSink):
    """Collects output in memory."""

    def __init__(self):
        self.buffer = bytearray()
        self.writes = 0

    def write_byte(self, value: int) -> None:
        self.buffer.append(value)
        self.writes += 1

    def getvalue(self) -> bytes:
        return bytes(self.buffer)


class BufferSource(ByteSource):
    """Serves a fixed input buffer, then reports EOF."""

    def __init__(self, data: Union[bytes, bytearray, str, List[int]] = b""):
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.data = bytes(data)
        self.index = 0

    @property
    def reads(self) -> int:
        return self.index

    def read_byte(self) -> Optional[int]:
        if self.index >= len(self.data):
            return None
        value = self.data[self.index]
        self.index += 1
        return value
