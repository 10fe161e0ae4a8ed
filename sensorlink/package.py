"""The fixed-size sensor reading sent from a client to the server."""

from __future__ import annotations

import struct
import time as _time
from dataclasses import dataclass

# size (u64), id (u32), temperature (i32), humidity (i32), padding, time (i64)
_LAYOUT = struct.Struct("<QIii4xq")


@dataclass(frozen=True)
class Package:
    """One sensor reading."""

    id: int
    temperature: int
    humidity: int
    time: int

    SIZE = _LAYOUT.size

    def to_bytes(self) -> bytes:
        """Encode the reading in its wire layout."""
        return _LAYOUT.pack(self.SIZE, self.id, self.temperature, self.humidity, self.time)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Package":
        """Decode a reading from the start of ``data``."""
        if len(data) < cls.SIZE:
            raise ValueError(
                f"package needs {cls.SIZE} bytes, got {len(data)}"
            )
        _size, ident, temperature, humidity, stamp = _LAYOUT.unpack_from(data)
        return cls(id=ident, temperature=temperature, humidity=humidity, time=stamp)

    def describe(self) -> str:
        """Return a human-readable, tab-indented summary of the reading."""
        return (
            f"\tid: {self.id}\n"
            f"\ttemperature: {self.temperature}\n"
            f"\thumidity: {self.humidity}\n"
            f"\ttime: {_time.ctime(self.time)}"
        )