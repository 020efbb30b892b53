"""Hardware: an address range paired with its backing byte storage."""

from __future__ import annotations

from dataclasses import dataclass

from .range import AddressRange


@dataclass(frozen=True)
class Hardware:
    """A device occupying `range` on the bus, backed by `data`.

    `data` should hold exactly `range.size` bytes. A shorter buffer is
    tolerated: addresses past its end behave as unmapped rather than
    raising IndexError.
    """

    range: AddressRange
    data: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.data, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"Hardware data must be bytes-like, got {type(self.data).__name__}"
            )
        # Store an immutable copy of the caller's buffer
        object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def zeroed(cls, range: AddressRange) -> Hardware:
        """Zero-filled hardware covering `range` (e.g. RAM)."""
        return cls(range, bytes(range.size))

    @classmethod
    def from_bytes(cls, low: int, data: bytes) -> Hardware:
        """Hardware covering exactly `data`, starting at address `low`.

        Raises:
            ValueError: If data is empty or does not fit the address space.
        """
        if not data:
            raise ValueError("Hardware data must not be empty")
        return cls(AddressRange.from_size(low, len(data)), data)

    def _offset(self, addr: int) -> int | None:
        """Translate absolute address to internal offset, or None if outside."""
        if not self.range.contains(addr):
            return None
        offset = addr - self.range.low
        if offset >= len(self.data):
            return None
        return offset

    def maps(self, addr: int) -> bool:
        """Return True if addr resolves to a byte of the backing data."""
        return self._offset(addr) is not None

    def read8(self, addr: int) -> int | None:
        """Read the byte at an absolute address, or None if not backed."""
        off = self._offset(addr)
        if off is None:
            return None
        return self.data[off]

    def patched(self, addr: int, data: bytes) -> Hardware:
        """Return a copy with `data` stored starting at absolute address `addr`.

        Every target address must already satisfy maps().
        """
        off = self._offset(addr)
        if off is None or off + len(data) > len(self.data):
            raise MemoryError(
                f"Patch out of bounds: 0x{addr:04X} (+{len(data)}) in {self.range}"
            )
        buf = bytearray(self.data)
        buf[off:off + len(data)] = data
        return Hardware(self.range, bytes(buf))
