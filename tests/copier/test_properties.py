"""Property-based tests for the copy invariants.

Why these tests exist:
- Identity copies must equal their source for any nesting of the builtin
  containers, not just the hand-picked shapes in the other tests
- The transform must run exactly once per referenced value
"""

from hypothesis import given
from hypothesis import strategies as st

from graphcopy import deep_copy_and_apply

scalars = st.none() | st.booleans() | st.integers() | st.text(max_size=5) | st.binary(max_size=5)

graphs = st.recursive(
    scalars,
    lambda children: (
        st.lists(children, max_size=4)
        | st.dictionaries(st.text(max_size=3), children, max_size=4)
        | st.tuples(children, children)
    ),
    max_leaves=20,
)


def count_references(value) -> int:
    """Number of values referenced by containers below value."""
    if isinstance(value, dict):
        value = list(value.values())
    if isinstance(value, (list, tuple)):
        return sum(1 + count_references(item) for item in value)
    return 0


@given(source=graphs)
def test_identity_copy_equals_source(source) -> None:
    """copy(x, identity) == x for any graph of builtin containers."""
    assert deep_copy_and_apply(source, lambda prop, value: value) == source


@given(source=graphs)
def test_transform_runs_once_per_reference(source) -> None:
    calls = []

    def record(prop, value):
        calls.append(value)
        return value

    deep_copy_and_apply(source, record)

    assert len(calls) == count_references(source)


@given(source=st.lists(st.lists(st.integers(), max_size=3), max_size=4))
def test_copy_shares_no_mutable_container(source) -> None:
    copy = deep_copy_and_apply(source, lambda prop, value: value)

    assert copy is not source
    assert all(a is not b for a, b in zip(copy, source, strict=True))
