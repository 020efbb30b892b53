"""Address bus: routes addresses to the hardware owning them."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from ..errors import OverlappingHardware, UndefinedAddress, WriteError
from .hardware import Hardware
from .range import ADDRESS_MAX, AddressRange

logger = logging.getLogger(__name__)


class AddressBus:
    """Immutable map of disjoint address ranges to their backing bytes.

    Hardware is attached with add() and detached with remove(). The bus
    dispatches byte reads and writes to the region whose range contains
    the target address. Every mutating operation returns a new bus and
    leaves the receiver untouched; regions that a call does not touch
    are shared between the two buses.

    Regions are kept in (low, high) order. Address resolution scans them
    in that order and the first containing range wins.
    """

    __slots__ = ("_regions",)

    def __init__(self) -> None:
        self._regions: tuple[Hardware, ...] = ()

    @classmethod
    def empty(cls) -> AddressBus:
        """Return a bus with no hardware attached."""
        return cls()

    @classmethod
    def _with_regions(cls, regions: Iterable[Hardware]) -> AddressBus:
        bus = cls()
        bus._regions = tuple(sorted(regions, key=lambda hw: hw.range))
        return bus

    @classmethod
    def from_hardware(cls, *hardware: Hardware) -> AddressBus:
        """Build a bus by attaching each piece of hardware in turn.

        Raises:
            OverlappingHardware: If any two ranges intersect.
        """
        bus = cls()
        for hw in hardware:
            bus = bus.add(hw)
        return bus

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = 0) -> AddressBus:
        """Build a bus with one region holding `data` starting at `offset`."""
        return cls().add(Hardware.from_bytes(offset, data))

    def add(self, hardware: Hardware) -> AddressBus:
        """Return a new bus with `hardware` attached.

        Args:
            hardware: The device to attach.

        Returns:
            A new AddressBus containing the device.

        Raises:
            OverlappingHardware: If the device's range intersects any
                attached range, including an identical one.
        """
        for existing in self._regions:
            if existing.range.overlaps(hardware.range):
                logger.debug(
                    "Rejected hardware at %s: overlaps %s",
                    hardware.range, existing.range,
                )
                raise OverlappingHardware(hardware.range, existing.range)
        logger.debug("Attached hardware at %s", hardware.range)
        return self._with_regions((*self._regions, hardware))

    def remove(self, hardware: Hardware) -> AddressBus:
        """Return a new bus without the region keyed by `hardware.range`.

        Only the range is compared; the backing bytes need not match.
        Removing a range that is not attached returns an equal bus.
        """
        kept = tuple(hw for hw in self._regions if hw.range != hardware.range)
        if len(kept) == len(self._regions):
            logger.debug("Remove of %s: not attached", hardware.range)
            return self
        logger.debug("Detached hardware at %s", hardware.range)
        return self._with_regions(kept)

    def _find(self, addr: int) -> Hardware | None:
        for hw in self._regions:
            if hw.range.contains(addr):
                return hw
        return None

    def region_at(self, addr: int) -> Hardware:
        """Return the hardware whose range contains addr.

        Raises:
            UndefinedAddress: If no attached range contains addr.
        """
        hw = self._find(addr)
        if hw is None:
            raise UndefinedAddress(addr)
        return hw

    def regions(self) -> tuple[Hardware, ...]:
        """All attached hardware in (low, high) order."""
        return self._regions

    def read(self, addr: int) -> int | None:
        """Read the byte at addr, or None if no region backs it."""
        hw = self._find(addr)
        if hw is None:
            return None
        return hw.read8(addr)

    def read_strict(self, addr: int) -> int:
        """Read the byte at addr.

        Raises:
            UndefinedAddress: If no region backs addr.
        """
        value = self.read(addr)
        if value is None:
            raise UndefinedAddress(addr)
        return value

    def read_bytes(self, addr: int, count: int) -> bytes | None:
        """Read `count` consecutive bytes starting at addr.

        All-or-nothing: if any address in the span is unmapped (or runs
        past the top of the address space) the result is None, never a
        partial read.

        Raises:
            ValueError: If count is negative.
        """
        if count < 0:
            raise ValueError(f"Byte count must be non-negative, got {count}")
        out = bytearray()
        for target in range(addr, addr + count):
            if target > ADDRESS_MAX:
                return None
            value = self.read(target)
            if value is None:
                return None
            out.append(value)
        return bytes(out)

    def read_range(self, address_range: AddressRange) -> bytes | None:
        """Read every byte in `address_range`, all-or-nothing like read_bytes."""
        return self.read_bytes(address_range.low, address_range.size)

    def read16(self, addr: int) -> int | None:
        """Read an unsigned 16-bit halfword (little-endian)."""
        data = self.read_bytes(addr, 2)
        if data is None:
            return None
        return data[0] | (data[1] << 8)

    def _replace(self, updated: Iterable[Hardware]) -> AddressBus:
        by_range = {hw.range: hw for hw in updated}
        return self._with_regions(by_range.get(hw.range, hw) for hw in self._regions)

    def write(self, addr: int, value: int) -> AddressBus:
        """Return a new bus with the byte at addr set to `value & 0xFF`.

        Raises:
            WriteError: If no region backs addr.
        """
        hw = self._find(addr)
        if hw is None or not hw.maps(addr):
            logger.debug("Write to unmapped address 0x%04X", addr)
            raise WriteError(addr)
        return self._replace([hw.patched(addr, bytes([value & 0xFF]))])

    def write_bytes(self, addr: int, data: Iterable[int]) -> AddressBus:
        """Return a new bus with `data` written at consecutive addresses.

        Every target address is resolved before anything is written, so
        a failure never produces a partially updated bus.

        Args:
            addr: Address of the first byte.
            data: Byte values; each is masked to 8 bits.

        Returns:
            The updated bus, or this bus unchanged if data is empty.

        Raises:
            WriteError: For the first target address no region backs.
        """
        plan: list[tuple[Hardware, int, int]] = []
        for i, value in enumerate(data):
            target = addr + i
            hw = self._find(target) if target <= ADDRESS_MAX else None
            if hw is None or not hw.maps(target):
                logger.debug(
                    "Write at 0x%04X aborted: 0x%04X unmapped", addr, target,
                )
                raise WriteError(target)
            plan.append((hw, target, value & 0xFF))
        if not plan:
            return self

        buffers: dict[AddressRange, tuple[Hardware, bytearray]] = {}
        for hw, target, value in plan:
            _, buf = buffers.setdefault(hw.range, (hw, bytearray(hw.data)))
            buf[target - hw.range.low] = value
        return self._replace(
            Hardware(hw.range, bytes(buf)) for hw, buf in buffers.values()
        )

    def write16(self, addr: int, value: int) -> AddressBus:
        """Write a 16-bit halfword (little-endian), atomically."""
        return self.write_bytes(addr, (value & 0xFF, (value >> 8) & 0xFF))

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[Hardware]:
        return iter(self._regions)

    def __contains__(self, addr: object) -> bool:
        if not isinstance(addr, int):
            return False
        return self.read(addr) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AddressBus):
            return NotImplemented
        return self._regions == other._regions

    def __hash__(self) -> int:
        return hash(self._regions)

    def __repr__(self) -> str:
        ranges = ", ".join(str(hw.range) for hw in self._regions)
        return f"AddressBus({ranges})"
