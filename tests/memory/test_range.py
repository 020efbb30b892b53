"""Tests for AddressRange bounds, ordering and overlap."""

import pytest

from addrbus.memory.range import ADDRESS_MAX, AddressRange, check_address


class TestAddressRange:
    """Tests for AddressRange construction and validation."""

    def test_size_is_inclusive(self) -> None:
        assert AddressRange(100, 103).size == 4
        assert AddressRange(5, 5).size == 1

    def test_full_address_space(self) -> None:
        r = AddressRange(0, ADDRESS_MAX)
        assert r.size == 0x10000

    def test_low_above_high_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid range"):
            AddressRange(10, 9)

    def test_out_of_address_space_raises(self) -> None:
        with pytest.raises(ValueError, match="outside address space"):
            AddressRange(0, 0x10000)
        with pytest.raises(ValueError, match="outside address space"):
            AddressRange(-1, 4)

    def test_from_size(self) -> None:
        assert AddressRange.from_size(0x8000, 0x100) == AddressRange(0x8000, 0x80FF)

    def test_from_size_rejects_empty(self) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            AddressRange.from_size(0, 0)

    def test_from_size_past_top_raises(self) -> None:
        with pytest.raises(ValueError, match="outside address space"):
            AddressRange.from_size(0xFFFF, 2)

    def test_ordering_by_low_then_high(self) -> None:
        ranges = [AddressRange(10, 20), AddressRange(0, 5), AddressRange(0, 3)]
        assert sorted(ranges) == [
            AddressRange(0, 3), AddressRange(0, 5), AddressRange(10, 20),
        ]

    def test_hashable(self) -> None:
        assert {AddressRange(1, 2): "a"}[AddressRange(1, 2)] == "a"

    def test_str(self) -> None:
        assert str(AddressRange(0x10, 0x1F)) == "[0x0010, 0x001F]"

    def test_contains(self) -> None:
        r = AddressRange(100, 103)
        assert r.contains(100)
        assert r.contains(103)
        assert not r.contains(99)
        assert not r.contains(104)

    def test_check_address(self) -> None:
        assert check_address(0xFFFF) == 0xFFFF
        with pytest.raises(ValueError):
            check_address(0x10000)


class TestOverlap:
    """Closed-interval overlap predicate."""

    def test_adjacent_ranges_do_not_overlap(self) -> None:
        assert not AddressRange(0, 9).overlaps(AddressRange(10, 19))
        assert not AddressRange(10, 19).overlaps(AddressRange(0, 9))

    def test_shared_boundary_overlaps(self) -> None:
        assert AddressRange(0, 10).overlaps(AddressRange(10, 19))
        assert AddressRange(10, 19).overlaps(AddressRange(0, 10))

    def test_single_address_inside_overlaps(self) -> None:
        assert AddressRange(5, 5).overlaps(AddressRange(0, 10))
        assert AddressRange(0, 10).overlaps(AddressRange(5, 5))

    def test_range_overlaps_itself(self) -> None:
        r = AddressRange(0x100, 0x1FF)
        assert r.overlaps(r)

    def test_disjoint_far_apart(self) -> None:
        assert not AddressRange(0, 1).overlaps(AddressRange(0xFF00, 0xFFFF))
