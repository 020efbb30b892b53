"""addrbus: a 16-bit address-space dispatcher for emulators."""

from .errors import BusError, OverlappingHardware, UndefinedAddress, WriteError
from .memory import AddressBus, AddressRange, Hardware

__all__ = [
    "AddressBus",
    "AddressRange",
    "BusError",
    "Hardware",
    "OverlappingHardware",
    "UndefinedAddress",
    "WriteError",
]
