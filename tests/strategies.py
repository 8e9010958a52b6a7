"""Hypothesis strategies for property-based testing of klaw-gen types."""

from hypothesis import strategies as st
from klaw_gen import PArray

# -----------------------------------------------------------------------------
# Basic value strategies
# -----------------------------------------------------------------------------

seeds = st.integers(min_value=0, max_value=2**32 - 1)

# Fuel budgets small enough to keep recursive generation fast
fuels = st.integers(min_value=0, max_value=6)
negative_fuels = st.integers(min_value=-1000, max_value=-1)

# -----------------------------------------------------------------------------
# Persistent array strategies
# -----------------------------------------------------------------------------

# Lists long enough to cross the 32-wide and 1024-wide trie boundaries
value_lists = st.one_of(
    st.lists(st.integers(), max_size=40),
    st.integers(min_value=1000, max_value=1100).map(lambda n: list(range(n))),
)

parrays = value_lists.map(PArray.from_values)

nonempty_parrays = st.lists(st.integers(), min_size=1, max_size=80).map(PArray.from_values)


@st.composite
def parray_with_index(draw: st.DrawFn) -> tuple[PArray[int], int]:
    """Generate a nonempty array together with a valid index into it."""
    arr = draw(nonempty_parrays)
    index = draw(st.integers(min_value=0, max_value=len(arr) - 1))
    return arr, index
