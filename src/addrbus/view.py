"""Bus views: address-ordered dumps and region tables for display with Rich."""

from __future__ import annotations

from collections.abc import Sequence

from rich.table import Table

from .memory.bus import AddressBus
from .memory.range import ADDRESS_MAX, AddressRange

ROW_WIDTH = 16


def _format_row(row_addr: int, cells: Sequence[int | None]) -> str:
    hex_str = " ".join("--" if b is None else f"{b:02X}" for b in cells)
    text = "".join(
        chr(b) if b is not None and 0x20 <= b <= 0x7E else "." for b in cells
    )
    return f"{row_addr:04X}  {hex_str}  {text}"


def _format_gap(first: int, last: int) -> str:
    return f"{first:04X}-{last:04X}  unmapped ({last - first + 1} bytes)"


def _row_cells(bus: AddressBus, row_addr: int) -> list[int | None]:
    """Bytes of one row; per-address lookups only when the row is partly mapped."""
    data = bus.read_bytes(row_addr, ROW_WIDTH)
    if data is not None:
        return list(data)
    return [bus.read(row_addr + col) for col in range(ROW_WIDTH)]


def format_hex_dump(bus: AddressBus, start_addr: int, num_rows: int = 16) -> str:
    """Dump `num_rows` 16-byte rows of the bus starting at `start_addr`.

    The start is aligned down to a row boundary and rows wrap from 0xFFF0
    back to 0x0000. Unmapped bytes inside a row show as `--`; runs of
    rows with nothing mapped collapse to a single `FIRST-LAST  unmapped`
    line, split at the wrap point.
    """
    lines: list[str] = []
    gap: tuple[int, int] | None = None
    row_addr = start_addr & ~(ROW_WIDTH - 1) & ADDRESS_MAX

    for _ in range(num_rows):
        if row_addr == 0 and gap is not None:
            lines.append(_format_gap(*gap))
            gap = None

        cells = _row_cells(bus, row_addr)
        if all(b is None for b in cells):
            first = row_addr if gap is None else gap[0]
            gap = (first, row_addr + ROW_WIDTH - 1)
        else:
            if gap is not None:
                lines.append(_format_gap(*gap))
                gap = None
            lines.append(_format_row(row_addr, cells))
        row_addr = (row_addr + ROW_WIDTH) & ADDRESS_MAX

    if gap is not None:
        lines.append(_format_gap(*gap))
    return "\n".join(lines)


def _region_rows(address_range: AddressRange, data: bytes) -> list[str]:
    rows = []
    first_row = address_range.low & ~(ROW_WIDTH - 1)
    for row_addr in range(first_row, address_range.high + 1, ROW_WIDTH):
        cells = [
            data[addr - address_range.low] if address_range.contains(addr) else None
            for addr in range(row_addr, row_addr + ROW_WIDTH)
        ]
        rows.append(_format_row(row_addr, cells))
    return rows


def format_region_dump(bus: AddressBus) -> str:
    """Dump each attached region in turn, read whole with read_range().

    Each block starts with a `[LOW, HIGH]  N bytes` header. Cells on the
    region's first and last rows that fall outside it show as `--`. A
    region whose backing data is shorter than its range cannot be read
    whole and is reported as such.
    """
    blocks: list[str] = []
    for hw in bus:
        header = f"{hw.range}  {hw.range.size} bytes"
        data = bus.read_range(hw.range)
        if data is None:
            blocks.append(f"{header}  (backing holds {len(hw.data)} bytes)")
            continue
        blocks.append("\n".join([header, *_region_rows(hw.range, data)]))
    return "\n\n".join(blocks)


def render_region_table(bus: AddressBus) -> Table:
    """Build a Rich table listing each attached region in address order."""
    table = Table(title="Address map")
    table.add_column("Low", justify="right", style="cyan")
    table.add_column("High", justify="right", style="cyan")
    table.add_column("Size", justify="right")

    for hw in bus:
        table.add_row(
            f"0x{hw.range.low:04X}",
            f"0x{hw.range.high:04X}",
            str(hw.range.size),
        )
    return table
