"""Tests for ImmutableList."""

import pytest

from uniflow.core.immutable_list import ImmutableList


class TestImmutableList:
    def test_empty(self) -> None:
        items: ImmutableList[int] = ImmutableList.empty()
        assert len(items) == 0
        assert list(items) == []

    def test_sequence_protocol(self) -> None:
        items = ImmutableList(["a", "b", "c"])
        assert items[0] == "a"
        assert items[-1] == "c"
        assert items[1:] == ImmutableList(["b", "c"])
        assert "b" in items
        assert items.index("c") == 2

    def test_index_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            ImmutableList([1])[5]

    def test_add_returns_new_list(self) -> None:
        original = ImmutableList([1, 2])
        added = original.add(3)
        assert list(added) == [1, 2, 3]
        assert list(original) == [1, 2]

    def test_add_all_preserves_order(self) -> None:
        original = ImmutableList([1, 2])
        combined = original.add_all(ImmutableList([3, 4]))
        assert list(combined) == [1, 2, 3, 4]
        assert list(original) == [1, 2]

    def test_remove_drops_all_equal_elements(self) -> None:
        assert list(ImmutableList([1, 2, 1, 3]).remove(1)) == [2, 3]

    def test_where_and_map(self) -> None:
        items = ImmutableList([1, 2, 3, 4])
        assert list(items.where(lambda x: x % 2 == 0)) == [2, 4]
        assert list(items.map(lambda x: x * 10)) == [10, 20, 30, 40]

    def test_element_at_or_none(self) -> None:
        items = ImmutableList(["a"])
        assert items.element_at_or_none(0) == "a"
        assert items.element_at_or_none(1) is None
        assert items.element_at_or_none(-1) is None

    def test_order_by(self) -> None:
        items = ImmutableList([3, 1, 2])
        assert list(items.order_by(lambda x: x)) == [1, 2, 3]
        assert list(items.order_by(lambda x: x, descending=True)) == [3, 2, 1]
        assert list(items) == [3, 1, 2]

    def test_equality_is_element_wise(self) -> None:
        assert ImmutableList([1, 2]) == ImmutableList([1, 2])
        assert ImmutableList([1, 2]) != ImmutableList([2, 1])
        assert ImmutableList([1]) != [1]

    def test_hash_matches_equality(self) -> None:
        assert hash(ImmutableList([1, 2])) == hash(ImmutableList((1, 2)))

    def test_cannot_assign_items(self) -> None:
        items = ImmutableList([1])
        with pytest.raises(TypeError):
            items[0] = 2  # type: ignore[index]
