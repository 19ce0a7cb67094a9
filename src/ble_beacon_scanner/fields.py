"""Fixed-offset field access over advertisement payloads.

All multi-byte fields in the supported beacon formats are big-endian.
Every read is bounds-checked and raises TruncatedPayload instead of
returning partial data.
"""

import struct

from .errors import TruncatedPayload

# struct formats keyed by (width, signed)
_FORMATS = {
    (1, False): ">B",
    (1, True): ">b",
    (2, False): ">H",
    (2, True): ">h",
    (4, False): ">I",
    (4, True): ">i",
}


class FieldReader:
    """Read-only view over a payload with checked big-endian accessors.

    Example:
        reader = FieldReader(payload)
        reader.require(14)
        battery = reader.uint16(2)
    """

    def __init__(self, data: bytes | bytearray | memoryview):
        # Copy so a caller-owned bytearray can't change under us
        self._data = bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    def require(self, size: int) -> None:
        """Check that the buffer holds at least ``size`` bytes.

        Raises:
            TruncatedPayload: If the buffer is shorter than ``size``
        """
        if len(self._data) < size:
            raise TruncatedPayload(size, len(self._data))

    def _check(self, offset: int, width: int) -> None:
        if offset < 0 or offset + width > len(self._data):
            raise TruncatedPayload(max(offset, 0) + width, len(self._data))

    def _unpack(self, offset: int, width: int, signed: bool) -> int:
        self._check(offset, width)
        return struct.unpack_from(_FORMATS[(width, signed)], self._data, offset)[0]

    def uint8(self, offset: int) -> int:
        return self._unpack(offset, 1, signed=False)

    def int8(self, offset: int) -> int:
        return self._unpack(offset, 1, signed=True)

    def uint16(self, offset: int) -> int:
        return self._unpack(offset, 2, signed=False)

    def int16(self, offset: int) -> int:
        return self._unpack(offset, 2, signed=True)

    def uint32(self, offset: int) -> int:
        return self._unpack(offset, 4, signed=False)

    def slice(self, offset: int, width: int) -> bytes:
        """Return ``width`` raw bytes starting at ``offset``."""
        self._check(offset, width)
        return self._data[offset:offset + width]

    def tail(self, offset: int) -> bytes:
        """Return everything from ``offset`` to the end of the buffer."""
        self._check(offset, 0)
        return self._data[offset:]
