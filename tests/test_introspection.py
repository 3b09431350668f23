"""Tests for the reflective introspector.

Checks which children Python objects report, in which order, and how
primitive members are classified.
"""

import array
import ctypes
import sys
from collections import deque, namedtuple
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import ClassVar, Optional

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from footprintlib import IntrospectionError, measure
from footprintlib.core import IndexLabel, MemberLabel, ReflectiveIntrospector, ScalarKind

from graph_fixtures import Leaf, Node, Stats


def labels(children):
    return [str(child.label) for child in children]


class Base:
    __slots__ = ('a',)


class Derived(Base):
    __slots__ = ('__secret', 'b')

    def __init__(self, a=None, secret=None):
        self.a = a
        self.__secret = secret


class Level(IntEnum):
    LOW = 1


@dataclass
class Point:
    x: int
    y: float
    tag: ClassVar[str] = "point"


class TestMembers:
    """Composite objects report their instance members."""

    def setup_method(self):
        self.introspector = ReflectiveIntrospector()

    def test_instance_dict_members(self):
        leaf = Leaf()
        children = list(self.introspector.children(Node(leaf)))

        assert len(children) == 1
        assert children[0].label == MemberLabel('next')
        assert children[0].value is leaf
        assert children[0].scalar_kind is None

    def test_class_attributes_are_not_members(self):
        children = list(self.introspector.children(Point(1, 2.0)))
        assert labels(children) == ['.x', '.y']

    def test_slots_across_inheritance(self):
        """Slots from every class in the MRO are members; unset ones are skipped."""
        obj = Derived(a=Leaf(), secret=Leaf())
        children = list(self.introspector.children(obj))

        assert labels(children) == ['._Derived__secret', '.a']

    def test_unset_slot_skipped(self):
        obj = Derived.__new__(Derived)
        assert list(self.introspector.children(obj)) == []

    def test_object_without_members(self):
        assert list(self.introspector.children("text")) == []
        assert list(self.introspector.children(object())) == []

    def test_unreadable_member(self):
        class Broken:
            def __get__(self, obj, objtype=None):
                raise RuntimeError("boom")

        class Weird:
            __slots__ = ('x',)

        Weird.x = Broken()

        with pytest.raises(IntrospectionError, match="'x'") as excinfo:
            list(self.introspector.children(Weird()))
        assert isinstance(excinfo.value.cause, RuntimeError)


class TestScalarClassification:
    """How member and element values are bucketed."""

    def setup_method(self):
        self.introspector = ReflectiveIntrospector()

    def test_runtime_types(self):
        assert self.introspector.scalar_kind_of(True) is ScalarKind.BOOLEAN
        assert self.introspector.scalar_kind_of(7) is ScalarKind.INT
        assert self.introspector.scalar_kind_of(7.5) is ScalarKind.DOUBLE
        assert self.introspector.scalar_kind_of("7") is None
        assert self.introspector.scalar_kind_of(None) is None

    def test_int_enum_is_not_scalar(self):
        assert not self.introspector.is_primitive(Level.LOW)

    def test_ctypes_values(self):
        assert self.introspector.scalar_kind_of(ctypes.c_short(1)) is ScalarKind.SHORT
        assert self.introspector.scalar_kind_of(ctypes.c_float(1)) is ScalarKind.FLOAT
        assert self.introspector.scalar_kind_of(ctypes.c_byte(1)) is ScalarKind.BYTE

    def test_annotation_decides_kind(self):
        """An int stored in a float member is a double."""
        kinds = [c.scalar_kind for c in self.introspector.children(Point(1, 2))]
        assert kinds == [ScalarKind.INT, ScalarKind.DOUBLE]

    def test_ctypes_annotation(self):
        class Packet:
            size: ctypes.c_short
            flags: "c_ubyte"

            def __init__(self):
                self.size = 512
                self.flags = 3

        kinds = [c.scalar_kind for c in self.introspector.children(Packet())]
        assert kinds == [ScalarKind.SHORT, ScalarKind.BYTE]

    def test_optional_annotation(self):
        class Maybe:
            value: Optional[float]

            def __init__(self, value):
                self.value = value

        child = next(self.introspector.children(Maybe(3)))
        assert child.scalar_kind is ScalarKind.DOUBLE
        assert child.declared_type is float

    def test_scalar_annotation_with_non_scalar_value(self):
        """A wrongly annotated member holding an object is still an object."""
        class Mislabelled:
            count: int

            def __init__(self):
                self.count = [1]

        child = next(self.introspector.children(Mislabelled()))
        assert child.scalar_kind is None

    def test_custom_scalar_types(self):
        class Money(float):
            pass

        introspector = ReflectiveIntrospector(scalar_types={Money: ScalarKind.LONG})
        assert introspector.scalar_kind_of(Money(1.0)) is ScalarKind.LONG
        assert introspector.scalar_kind_of(1.0) is ScalarKind.DOUBLE


class TestSequences:
    """Sequences report positional elements."""

    def setup_method(self):
        self.introspector = ReflectiveIntrospector()

    def test_list_elements(self):
        leaf = Leaf()
        children = list(self.introspector.children([leaf, 3, None]))

        assert [c.label for c in children] == [IndexLabel(0), IndexLabel(1), IndexLabel(2)]
        assert children[0].value is leaf
        assert children[1].scalar_kind is ScalarKind.INT
        assert children[2].value is None

    def test_dict_is_flattened(self):
        children = list(self.introspector.children({"a": 1, "b": 2}))
        assert [c.value for c in children] == ["a", 1, "b", 2]

    def test_array_typecodes(self):
        shorts = list(self.introspector.children(array.array('h', [1, 2])))
        doubles = list(self.introspector.children(array.array('d', [1.0])))

        assert [c.scalar_kind for c in shorts] == [ScalarKind.SHORT, ScalarKind.SHORT]
        assert [c.scalar_kind for c in doubles] == [ScalarKind.DOUBLE]

    def test_bytes_are_byte_elements(self):
        children = list(self.introspector.children(b"ab"))
        assert [c.scalar_kind for c in children] == [ScalarKind.BYTE, ScalarKind.BYTE]

    @pytest.mark.parametrize("value", [[1], (1,), deque([1]), {1}, frozenset([1]), {1: 2}, b"x"])
    def test_is_sequence(self, value):
        assert self.introspector.is_sequence(value)

    def test_composite_is_not_sequence(self):
        assert not self.introspector.is_sequence(Stats())


class TestMeasuringPythonObjects:
    """End-to-end footprints of common Python values."""

    def test_array_footprint(self):
        footprint = measure(array.array('h', [1, 2, 3]))

        assert footprint.object_count == 1
        assert footprint.reference_count == 0
        assert dict(footprint.primitives) == {ScalarKind.SHORT: 3}

    def test_bytearray_footprint(self):
        footprint = measure(bytearray(b"abcd"))
        assert dict(footprint.primitives) == {ScalarKind.BYTE: 4}

    def test_int_enum_element_is_excluded(self):
        footprint = measure([Level.LOW])

        assert footprint.object_count == 1
        assert footprint.reference_count == 1

    def test_dataclass_footprint(self):
        footprint = measure([Point(1, 2), Point(3, 4.5)])

        assert footprint.object_count == 3
        assert footprint.reference_count == 2
        assert dict(footprint.primitives) == {ScalarKind.INT: 2, ScalarKind.DOUBLE: 2}

    def test_slotted_footprint(self):
        footprint = measure(Derived(a=Leaf(), secret=Leaf()))

        assert footprint.object_count == 3
        assert footprint.reference_count == 2


def test_generic_annotation_on_null_member():
    """Parameterised generics are not used as declared types."""
    from typing import List

    class Holder:
        items: List[int]
        more: list[int]

        def __init__(self):
            self.items = None
            self.more = None

    children = list(ReflectiveIntrospector().children(Holder()))
    assert [c.declared_type for c in children] == [None, None]

    footprint = measure(Holder())
    assert footprint.object_count == 1
    assert footprint.reference_count == 2


class Tagged(list):
    """List carrying an attribute of its own."""

    def __init__(self, items, meta):
        super().__init__(items)
        self.meta = meta


class Row(dict):
    pass


class Record(namedtuple('RecordBase', ['key', 'value'])):
    pass


class TestContainerSubclasses:
    """Subclassed containers report their elements and then their members."""

    def setup_method(self):
        self.introspector = ReflectiveIntrospector()

    def test_list_subclass_members_follow_elements(self):
        tagged = Tagged([Leaf()], [Leaf()])
        assert labels(self.introspector.children(tagged)) == ['[0]', '.meta']

    def test_list_subclass_footprint(self):
        footprint = measure(Tagged([], [Leaf(), Leaf(), Leaf()]))

        # tagged, meta list, three leaves
        assert footprint.object_count == 5
        assert footprint.reference_count == 4

    def test_dict_subclass_footprint(self):
        row = Row(key=Leaf())
        row.extra = Leaf()
        footprint = measure(row)

        # row, "key", its leaf, extra leaf
        assert footprint.object_count == 4
        assert footprint.reference_count == 3

    def test_namedtuple_subclass_footprint(self):
        record = Record(Leaf(), 3)
        record.hidden = Leaf()
        footprint = measure(record)

        assert footprint.object_count == 3
        assert footprint.reference_count == 2
        assert dict(footprint.primitives) == {ScalarKind.INT: 1}

    def test_plain_containers_have_no_members(self):
        assert labels(self.introspector.children([Leaf()])) == ['[0]']
        assert labels(self.introspector.children({"a": 1})) == ['[0]', '[1]']


def test_failing_dict_lookup_is_reported():
    """Errors other than AttributeError while reading __dict__ are fatal."""
    class Grumpy:
        __slots__ = ()

        def __getattr__(self, name):
            raise RuntimeError(f"no {name}")

    with pytest.raises(IntrospectionError, match="__dict__") as excinfo:
        list(ReflectiveIntrospector().children(Grumpy()))
    assert isinstance(excinfo.value.cause, RuntimeError)
