"""Tests for collection copiers.

Why these tests exist:
- Every collection shape must come back as an independent container of the
  right type, with each element copied and transformed exactly once
- Mapping keys are never transformed and must be immutable
- The set guard is the only protection against transforms that break set
  uniqueness; it must fire for replaced and mutated elements
- Fidelity losses are reported, never raised
"""

import array
from collections import OrderedDict, UserList, defaultdict, deque
from collections.abc import Collection, Mapping, Sequence
from collections.abc import Set as AbstractSet
from dataclasses import dataclass, field
from types import MappingProxyType

import pytest

from graphcopy import (
    TransformError,
    UnsafeSetMutationError,
    UnsupportedShapeError,
    WarningKind,
    deep_copy_and_apply,
)


class Tag:
    """Hashable but mutable: hash follows name."""

    def __init__(self, name: str = "") -> None:
        self.name = name

    def __hash__(self) -> int:
        return hash(self.name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Tag) and other.name == self.name


class BoundedList(list):
    def __init__(self, capacity: int) -> None:
        super().__init__()
        self.capacity = capacity


class TaggedList(list):
    pass


class NamedRegistry(dict):
    def __init__(self, name: str) -> None:
        super().__init__()
        self.name = name


class LabelSet(set):
    def __init__(self, *, label: str) -> None:
        super().__init__()
        self.label = label


class TagSet(set):
    pass


@dataclass
class RecordWithCollections:
    names: list[str] = field(default_factory=list)
    unique_ids: set[int] = field(default_factory=set)
    scores: dict[str, int] = field(default_factory=dict)


@dataclass
class AbstractFields:
    items: Sequence[int] = field(default_factory=list)
    lookup: Mapping[str, int] = field(default_factory=dict)
    unique: AbstractSet[str] = field(default_factory=set)
    concrete: list[int] = field(default_factory=list)


def upper(prop, value):
    return value.upper() if isinstance(value, str) else value


# Arrays


def test_tuple_is_copied_element_wise(identity_transform) -> None:
    """Tuples stay tuples; mutable elements are copied, not shared."""
    inner = [1, 2]
    source = (inner, "x")

    copy = deep_copy_and_apply(source, identity_transform)

    assert type(copy) is tuple
    assert copy == source
    assert copy[0] is not inner


def test_array_keeps_typecode() -> None:
    source = array.array("d", [1.0, 2.5])

    copy = deep_copy_and_apply(source, lambda prop, value: value * 2)

    assert isinstance(copy, array.array)
    assert copy.typecode == "d"
    assert copy.tolist() == [2.0, 5.0]
    assert copy is not source


def test_numpy_one_dimensional_array() -> None:
    """numpy arrays are copied element-wise and keep their dtype."""
    np = pytest.importorskip("numpy")
    source = np.array([1, 2, 3])

    copy = deep_copy_and_apply(source, lambda prop, value: value * 2)

    assert copy.tolist() == [2, 4, 6]
    assert copy.dtype == source.dtype
    assert source.tolist() == [1, 2, 3]


def test_numpy_multi_dimensional_array_is_rejected(identity_transform) -> None:
    np = pytest.importorskip("numpy")

    with pytest.raises(UnsupportedShapeError) as exc_info:
        deep_copy_and_apply(["first", np.zeros((2, 2))], identity_transform)

    assert exc_info.value.path == "root[1]"
    assert "Array has rank 2" in str(exc_info.value)


# Custom sequences


@pytest.mark.parametrize(
    "source",
    [UserList([1, 2]), TaggedList([1, 2]), bytearray(b"\x01\x02")],
    ids=["userlist", "list-subclass", "bytearray"],
)
def test_custom_sequence_keeps_type(source, identity_transform) -> None:
    copy = deep_copy_and_apply(source, identity_transform)

    assert type(copy) is type(source)
    assert copy == source
    assert copy is not source


def test_deque_keeps_maxlen(identity_transform) -> None:
    source = deque([1, 2, 3], maxlen=3)

    copy = deep_copy_and_apply(source, identity_transform)

    assert copy == source
    assert copy.maxlen == 3


def test_custom_sequence_without_argless_constructor(identity_transform) -> None:
    """Sequences needing constructor arguments cannot be rebuilt."""
    source = BoundedList(capacity=2)
    source.append(1)

    with pytest.raises(UnsupportedShapeError) as exc_info:
        deep_copy_and_apply({"items": source}, identity_transform)

    assert exc_info.value.path == "root[items]"
    assert "Cannot create instance of sequence type" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, TypeError)


# Mappings


def test_mapping_values_transformed_keys_kept() -> None:
    """CRITICAL: Keys are never transformed; values are, in insertion order."""
    source = {"alice": "secret", "bob": "hunter2"}

    copy = deep_copy_and_apply(source, upper)

    assert copy == {"alice": "SECRET", "bob": "HUNTER2"}
    assert list(copy) == ["alice", "bob"]


def test_mapping_value_path_uses_key() -> None:
    def explode(prop, value):
        if value == 2:
            raise ValueError("bad score")
        return value

    record = RecordWithCollections(scores={"alice": 1, "bob": 2})

    with pytest.raises(TransformError) as exc_info:
        deep_copy_and_apply(record, explode)

    assert exc_info.value.path == "root.scores[bob]"
    assert "dictionary value" in str(exc_info.value)
    assert exc_info.value.declared_type == "int"


def test_non_immutable_key_is_rejected(identity_transform) -> None:
    with pytest.raises(UnsupportedShapeError) as exc_info:
        deep_copy_and_apply({(1, 2): "pair"}, identity_transform)

    message = str(exc_info.value)
    assert "Dictionary key type 'tuple' is not supported at path: root" in message
    assert "allowed as dictionary keys" in message


def test_defaultdict_keeps_default_factory(identity_transform) -> None:
    source = defaultdict(list, {"a": [1]})

    copy = deep_copy_and_apply(source, identity_transform)

    assert type(copy) is defaultdict
    assert copy.default_factory is list
    assert copy == source
    assert copy["a"] is not source["a"]


def test_ordered_dict_keeps_type(identity_transform) -> None:
    source = OrderedDict([("b", 2), ("a", 1)])

    copy = deep_copy_and_apply(source, identity_transform)

    assert type(copy) is OrderedDict
    assert list(copy.items()) == [("b", 2), ("a", 1)]


def test_dict_subclass_fallback_warns(identity_transform, sink) -> None:
    """Subclasses that cannot be rebuilt become dict with COMPARER_FALLBACK."""
    source = NamedRegistry("prod")
    source["a"] = 1

    copy = deep_copy_and_apply(source, identity_transform, sink=sink)

    assert type(copy) is dict
    assert copy == {"a": 1}
    [warning] = sink.by_kind(WarningKind.COMPARER_FALLBACK)
    assert warning.path == "root"
    assert warning.tags["sourceType"].endswith("NamedRegistry")


def test_read_only_mapping_becomes_dict(identity_transform, sink) -> None:
    """Non-dict mappings become plain dicts without a warning."""
    copy = deep_copy_and_apply(MappingProxyType({"a": 1}), identity_transform, sink=sink)

    assert type(copy) is dict
    assert copy == {"a": 1}
    assert sink.warnings == []


# Sets


def test_set_of_immutables_can_be_transformed() -> None:
    """Immutable elements are not guarded; any replacement is allowed."""
    assert deep_copy_and_apply({"a", "b"}, upper) == {"A", "B"}


def test_frozenset_stays_frozen(identity_transform) -> None:
    copy = deep_copy_and_apply(frozenset({1, 2}), identity_transform)
    assert type(copy) is frozenset
    assert copy == frozenset({1, 2})


def test_set_of_mutable_elements_with_identity(identity_transform) -> None:
    source = {Tag("a"), Tag("b")}

    copy = deep_copy_and_apply(source, identity_transform)

    assert copy == source
    assert not {id(t) for t in copy} & {id(t) for t in source}


def test_set_guard_rejects_in_place_mutation() -> None:
    """CRITICAL: Mutating a hashed element would corrupt the rebuilt set."""

    def rename(prop, value):
        if isinstance(value, Tag):
            value.name = value.name.upper()
        return value

    with pytest.raises(UnsafeSetMutationError) as exc_info:
        deep_copy_and_apply({Tag("a")}, rename)

    assert exc_info.value.path == "root[0]"
    assert "mutated the element in place" in str(exc_info.value)


def test_set_guard_rejects_replacement() -> None:
    def replace(prop, value):
        return Tag(value.name) if isinstance(value, Tag) else value

    with pytest.raises(UnsafeSetMutationError) as exc_info:
        deep_copy_and_apply({Tag("a")}, replace)

    assert "returned a different object" in str(exc_info.value)


def test_set_guard_can_be_disabled() -> None:
    def replace(prop, value):
        return Tag(value.name.upper()) if isinstance(value, Tag) else value

    copy = deep_copy_and_apply({Tag("a")}, replace, check_set_mutations=False)

    assert copy == {Tag("A")}


def test_set_subclass_is_preserved(identity_transform) -> None:
    copy = deep_copy_and_apply(TagSet({1, 2}), identity_transform)
    assert type(copy) is TagSet
    assert copy == {1, 2}


def test_set_subclass_fallback_warns(identity_transform, sink) -> None:
    source = LabelSet(label="ids")
    source.update({1, 2})

    copy = deep_copy_and_apply(source, identity_transform, sink=sink)

    assert type(copy) is set
    assert copy == {1, 2}
    assert len(sink.by_kind(WarningKind.COMPARER_FALLBACK)) == 1


# Generic lists


def test_list_is_copied_deeply(identity_transform) -> None:
    inner = {"a": 1}
    source = [inner, [2, 3]]

    copy = deep_copy_and_apply(source, identity_transform)

    assert copy == source
    assert copy[0] is not inner
    assert copy[1] is not source[1]


def test_other_collections_become_lists(identity_transform) -> None:
    assert deep_copy_and_apply({"a": 1, "b": 2}.values(), identity_transform) == [1, 2]


@pytest.mark.parametrize(
    "source",
    [[], {}, set(), ()],
    ids=["list", "dict", "set", "tuple"],
)
def test_empty_collections(source, identity_transform) -> None:
    copy = deep_copy_and_apply(source, identity_transform)
    assert copy == source
    assert type(copy) is type(source)


def test_record_collections_are_independent(identity_transform) -> None:
    record = RecordWithCollections(names=["a"], unique_ids={1}, scores={"a": 1})

    copy = deep_copy_and_apply(record, identity_transform)

    assert copy == record
    assert copy.names is not record.names
    assert copy.unique_ids is not record.unique_ids
    assert copy.scores is not record.scores


# Fidelity warnings


def test_abstract_declared_types_report_fidelity_loss(identity_transform, sink) -> None:
    """Abstract declared collection types are copied as concrete ones, with a warning."""
    source = AbstractFields(items=[1], lookup={"a": 1}, unique={"x"}, concrete=[2])

    copy = deep_copy_and_apply(source, identity_transform, sink=sink)

    assert copy == source
    warnings = sink.by_kind(WarningKind.TYPE_FIDELITY_LOSS)
    assert [w.path for w in warnings] == ["root.items", "root.lookup", "root.unique"]
    assert [w.tags["runtimeType"] for w in warnings] == ["list", "dict", "set"]
    assert warnings[0].tags["propertyName"] == "items"
    assert warnings[0].tags["declaredType"] == "Sequence[int]"


def test_concrete_declared_types_do_not_warn(identity_transform, sink) -> None:
    deep_copy_and_apply(RecordWithCollections(names=["a"]), identity_transform, sink=sink)
    assert sink.warnings == []


def test_containers_that_keep_their_type_do_not_warn(identity_transform, sink) -> None:
    """Only containers rebuilt as dict, set or list report a fidelity loss."""

    @dataclass
    class Shapes:
        pair: Sequence[int] = (1, 2)
        names: Collection[str] = frozenset()

    source = Shapes(pair=(1, 2), names={"a", "b"})

    copy = deep_copy_and_apply(source, identity_transform, sink=sink)

    assert copy == source
    assert type(copy.pair) is tuple
    assert type(copy.names) is set
    assert sink.warnings == []
