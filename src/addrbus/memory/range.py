"""Address ranges: closed, inclusive intervals of the 16-bit address space."""

from __future__ import annotations

from dataclasses import dataclass

# Address space bounds (16-bit bus)
ADDRESS_MIN = 0x0000
ADDRESS_MAX = 0xFFFF
ADDRESS_SPACE_SIZE = ADDRESS_MAX + 1


def check_address(addr: int) -> int:
    """Validate that addr lies within the address space.

    Raises:
        ValueError: If addr is outside [ADDRESS_MIN, ADDRESS_MAX].
    """
    if not ADDRESS_MIN <= addr <= ADDRESS_MAX:
        raise ValueError(
            f"Address 0x{addr:X} outside address space "
            f"[0x{ADDRESS_MIN:04X}, 0x{ADDRESS_MAX:04X}]"
        )
    return addr


@dataclass(frozen=True, order=True)
class AddressRange:
    """A closed interval [low, high] of addresses, both ends inclusive.

    Ranges order by (low, high), which is the order the bus keeps its
    regions in.
    """

    low: int
    high: int

    def __post_init__(self) -> None:
        check_address(self.low)
        check_address(self.high)
        if self.low > self.high:
            raise ValueError(
                f"Invalid range: low 0x{self.low:04X} > high 0x{self.high:04X}"
            )

    @classmethod
    def from_size(cls, low: int, size: int) -> AddressRange:
        """Build the range of `size` addresses starting at `low`."""
        if size <= 0:
            raise ValueError(f"Range size must be positive, got {size}")
        return cls(low, low + size - 1)

    @property
    def size(self) -> int:
        return self.high - self.low + 1

    def overlaps(self, other: AddressRange) -> bool:
        """Return True if the two ranges share at least one address."""
        return not (other.low > self.high or other.high < self.low)

    def contains(self, addr: int) -> bool:
        return self.low <= addr <= self.high

    def __str__(self) -> str:
        return f"[0x{self.low:04X}, 0x{self.high:04X}]"
