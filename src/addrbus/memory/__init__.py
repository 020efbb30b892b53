"""Address bus, hardware regions and address ranges."""

from .bus import AddressBus
from .hardware import Hardware
from .range import ADDRESS_MAX, ADDRESS_MIN, ADDRESS_SPACE_SIZE, AddressRange

__all__ = [
    "ADDRESS_MAX",
    "ADDRESS_MIN",
    "ADDRESS_SPACE_SIZE",
    "AddressBus",
    "AddressRange",
    "Hardware",
]
