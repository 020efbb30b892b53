"""Bus error hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .memory.range import AddressRange


class BusError(Exception):
    """Base class for all address bus errors."""


class OverlappingHardware(BusError, ValueError):
    """Raised when attached hardware would intersect an existing region."""

    def __init__(self, candidate: AddressRange, existing: AddressRange) -> None:
        super().__init__(
            f"Address range {candidate} overlaps existing hardware at {existing}"
        )
        self.candidate = candidate
        self.existing = existing


class UndefinedAddress(BusError, MemoryError):
    """Raised by strict lookups when no region owns the address."""

    def __init__(self, address: int) -> None:
        super().__init__(f"Unmapped address: 0x{address:04X}")
        self.address = address


class WriteError(BusError, MemoryError):
    """Raised when a write targets an address no region owns."""

    def __init__(self, address: int) -> None:
        super().__init__(f"Write to unmapped address: 0x{address:04X}")
        self.address = address
