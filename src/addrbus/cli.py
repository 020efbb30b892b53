"""Command-line interface: assemble a bus from devices and inspect it."""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from .errors import BusError
from .memory.bus import AddressBus
from .memory.hardware import Hardware
from .memory.range import AddressRange
from .view import format_hex_dump, format_region_dump, render_region_table

DEFAULT_ROWS = 16


def _parse_int(value: str) -> int:
    """Parse a decimal or 0x-prefixed integer."""
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number '{value}'") from None


def _parse_positive_int(value: str) -> int:
    """Parse a strictly positive integer (e.g. a row count)."""
    parsed = _parse_int(value)
    if parsed <= 0:
        raise argparse.ArgumentTypeError(
            f"must be a positive integer, got '{value}'"
        )
    return parsed


def _split_pair(value: str, form: str) -> tuple[str, str]:
    if ":" not in value:
        raise argparse.ArgumentTypeError(
            f"invalid format '{value}', expected {form}"
        )
    left, right = value.split(":", 1)
    if not left or not right:
        raise argparse.ArgumentTypeError(
            f"invalid format '{value}', expected {form}"
        )
    return left, right


def _parse_ram_arg(value: str) -> AddressRange:
    """Parse a --ram LOW:HIGH argument into an inclusive AddressRange.

    Raises:
        argparse.ArgumentTypeError: If the format or bounds are invalid.
    """
    low, high = _split_pair(value, "LOW:HIGH")
    try:
        return AddressRange(_parse_int(low), _parse_int(high))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _parse_rom_arg(value: str) -> tuple[int, str]:
    """Parse a --rom ADDR:FILE argument."""
    addr, path = _split_pair(value, "ADDR:FILE")
    return _parse_int(addr), path


def _parse_poke_arg(value: str) -> tuple[int, int]:
    """Parse a --poke ADDR:BYTE argument."""
    addr, byte = _split_pair(value, "ADDR:BYTE")
    parsed = _parse_int(byte)
    if not 0 <= parsed <= 0xFF:
        raise argparse.ArgumentTypeError(f"byte value out of range: '{byte}'")
    return _parse_int(addr), parsed


def build_bus(
    ram: list[AddressRange],
    roms: list[tuple[int, str]],
    pokes: list[tuple[int, int]] | None = None,
) -> AddressBus:
    """Attach RAM ranges and ROM images to a fresh bus, then apply pokes.

    Args:
        ram: Ranges to back with zero-filled RAM.
        roms: (address, file_path) pairs of images to map.
        pokes: (address, byte) pairs written after all devices attach.

    Returns:
        The assembled AddressBus.

    Raises:
        OSError: If a ROM image cannot be read.
        ValueError: If a ROM image is empty or runs past the address space.
        BusError: If devices overlap or a poke targets an unmapped address.
    """
    bus = AddressBus.empty()
    for address_range in ram:
        bus = bus.add(Hardware.zeroed(address_range))
    for addr, path in roms:
        with open(path, "rb") as f:
            data = f.read()
        bus = bus.add(Hardware.from_bytes(addr, data))
    for addr, value in pokes or []:
        bus = bus.write(addr, value)
    return bus


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main(argv: list[str] | None = None) -> None:
    """Entry point for the addrbus CLI."""
    devices = argparse.ArgumentParser(add_help=False)
    devices.add_argument(
        "--ram", action="append", type=_parse_ram_arg, default=[],
        metavar="LOW:HIGH",
        help="Map zero-filled RAM over an inclusive range (repeatable)",
    )
    devices.add_argument(
        "--rom", action="append", type=_parse_rom_arg, default=[],
        metavar="ADDR:FILE",
        help="Map FILE contents starting at ADDR (repeatable)",
    )
    devices.add_argument(
        "--poke", action="append", type=_parse_poke_arg, default=[],
        metavar="ADDR:BYTE",
        help="Write BYTE at ADDR after mapping devices (repeatable)",
    )
    devices.add_argument(
        "-v", "--verbose", action="store_true", help="Log bus activity to stderr",
    )

    parser = argparse.ArgumentParser(description="16-bit address bus inspector")
    sub = parser.add_subparsers(dest="command")

    dump_parser = sub.add_parser(
        "dump", parents=[devices], help="Print the address map and a hex dump",
    )
    dump_parser.add_argument(
        "--start", type=_parse_int, default=0, metavar="ADDR",
        help="First address to dump (aligned down to 16 bytes)",
    )
    dump_parser.add_argument(
        "--rows", type=_parse_positive_int, default=DEFAULT_ROWS,
        help=f"Number of 16-byte rows (default {DEFAULT_ROWS})",
    )
    dump_parser.add_argument(
        "--by-region", action="store_true",
        help="Dump each attached region whole instead of a window of rows",
    )

    sub.add_parser("map", parents=[devices], help="Print the address map")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    _configure_logging(args.verbose)

    try:
        bus = build_bus(args.ram, args.rom, args.poke)
    except (BusError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    console = Console()
    console.print(render_region_table(bus))
    if args.command == "dump":
        if args.by_region:
            dump = format_region_dump(bus)
        else:
            dump = format_hex_dump(bus, args.start, args.rows)
        console.print(dump, markup=False, highlight=False, soft_wrap=True)
