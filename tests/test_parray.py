"""Tests for persistent arrays."""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from klaw_gen import (
    IndexOutOfRangeError,
    MissingIndexError,
    PArray,
    PRNGSource,
    ReplaySource,
    int_below,
    pure,
    traverse,
)

from tests.strategies import parray_with_index, parrays, value_lists


class TestConstruction:
    """Tests for init, from_values and of_list."""

    def test_init_evaluates_each_index(self):
        arr = PArray.init(5, lambda i: i * i)
        assert arr.values() == [0, 1, 4, 9, 16]
        assert len(arr) == 5

    def test_empty_array(self):
        arr = PArray.init(0, lambda i: i)
        assert len(arr) == 0
        assert arr.to_list() == []

    def test_negative_length_rejected(self):
        with pytest.raises(ValueError, match='negative length'):
            PArray.init(-1, lambda i: i)

    @pytest.mark.parametrize('length', [1, 31, 32, 33, 1023, 1024, 1025, 5000])
    def test_trie_boundaries(self, length):
        """Lengths around the 32-way node boundaries index correctly."""
        arr = PArray.init(length, lambda i: i)
        assert [arr.get(i) for i in range(length)] == list(range(length))

    def test_of_list_accepts_any_order(self):
        arr = PArray.of_list([(2, 'c'), (0, 'a'), (1, 'b')])
        assert arr.values() == ['a', 'b', 'c']

    def test_of_list_missing_index(self):
        """A gap in the indices is a precondition violation."""
        with pytest.raises(MissingIndexError) as exc_info:
            PArray.of_list([(0, 'a'), (2, 'c')])
        assert exc_info.value.index == 1
        assert exc_info.value.length == 2

    def test_of_list_duplicate_index(self):
        """Duplicates leave some other index missing."""
        with pytest.raises(MissingIndexError):
            PArray.of_list([(0, 'a'), (0, 'b')])

    def test_of_list_out_of_range_index(self):
        with pytest.raises(MissingIndexError):
            PArray.of_list([(0, 'a'), (5, 'b')])


class TestAccess:
    """Tests for get, set and their bounds checks."""

    @pytest.mark.parametrize('index', [-1, 3, 100])
    def test_get_out_of_range(self, index):
        arr = PArray.from_values('abc')
        with pytest.raises(IndexOutOfRangeError):
            arr.get(index)

    def test_set_out_of_range(self):
        """Out-of-range errors are also IndexErrors."""
        arr = PArray.from_values('abc')
        with pytest.raises(IndexError):
            arr.set(3, 'd')

    def test_get_on_empty_array(self):
        with pytest.raises(IndexOutOfRangeError):
            PArray.from_values([]).get(0)

    @given(parray_with_index(), st.integers())
    def test_set_then_get(self, arr_index, value):
        """get(i, set(i, v, a)) == v."""
        arr, index = arr_index
        assert arr.set(index, value).get(index) == value

    @given(parray_with_index(), st.integers())
    def test_update_isolation(self, arr_index, value):
        """set changes only index i and leaves the original untouched."""
        arr, index = arr_index
        before = arr.values()
        updated = arr.set(index, value)
        assert arr.values() == before
        for j in range(len(arr)):
            if j != index:
                assert updated.get(j) == arr.get(j)

    def test_versions_share_storage(self):
        """Untouched trie nodes are shared between versions."""
        arr = PArray.init(100, lambda i: i)
        updated = arr.set(99, -1)
        assert updated.root[0] is arr.root[0]
        assert updated.root[3] is not arr.root[3]

    def test_swap(self):
        arr = PArray.from_values([1, 2, 3])
        assert arr.swap(0, 2).values() == [3, 2, 1]
        assert arr.swap(1, 1) is arr
        assert arr.values() == [1, 2, 3]

    def test_is_frozen(self):
        arr = PArray.from_values([1])
        with pytest.raises(AttributeError):
            arr.length = 5  # type: ignore[misc]


class TestConversion:
    """Tests for to_list, values and equality."""

    @given(parrays)
    def test_round_trip(self, arr):
        """of_list(to_list(a)) is observationally equal to a."""
        copy = PArray.of_list(arr.to_list())
        assert len(copy) == len(arr)
        assert all(copy.get(i) == arr.get(i) for i in range(len(arr)))
        assert copy == arr

    @given(value_lists)
    def test_to_list_ascending(self, values):
        pairs = PArray.from_values(values).to_list()
        assert [i for i, _ in pairs] == list(range(len(values)))
        assert [v for _, v in pairs] == values

    def test_iteration(self):
        assert list(PArray.from_values('xyz')) == ['x', 'y', 'z']


class TestTraverse:
    """Tests for traverse()."""

    def test_samples_each_element_in_order(self):
        gens = PArray.from_values([int_below(10), pure('fixed'), int_below(3)])
        source = ReplaySource([7, 2])
        assert traverse(gens).run(source).values() == [7, 'fixed', 2]
        assert source.consumed == 2

    def test_preserves_length(self):
        gens = PArray.init(70, lambda i: int_below(i + 1))
        arr = traverse(gens).run(PRNGSource(seed=2))
        assert len(arr) == 70
        assert all(0 <= arr.get(i) <= i for i in range(70))
