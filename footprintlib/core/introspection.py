"""Introspector abstraction for FootprintLib.

The Introspector is what lets the explorer walk arbitrary object graphs.
It knows how to list the children of a value and which values count as
primitive scalars, so the exploration algorithm never touches Python's
object model directly.
"""

import array
import inspect
import itertools
import types
import typing
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Tuple

from ..errors import IntrospectionError
from .chain import EdgeLabel, IndexLabel, MemberLabel
from .scalars import DEFAULT_SCALAR_TYPES, ScalarKind, kind_for_typecode

SEQUENCE_TYPES = (list, tuple, deque, set, frozenset)
BYTE_SEQUENCE_TYPES = (bytes, bytearray)

# Containers that cannot carry instance members of their own
_PLAIN_SEQUENCE_TYPES = frozenset((array.array, dict) + SEQUENCE_TYPES + BYTE_SEQUENCE_TYPES)

# Slot entries that are interpreter plumbing rather than members
_IGNORED_SLOTS = frozenset(('__dict__', '__weakref__'))

_UNION_ORIGINS = (typing.Union, types.UnionType)


class Child(NamedTuple):
    """One outgoing edge of a value.

    ``scalar_kind`` is set when the edge holds a primitive value; the explorer
    never pushes such children. ``declared_type`` is the member's annotated
    type, used to describe members that currently hold None.
    """
    label: EdgeLabel
    value: Any
    scalar_kind: Optional[ScalarKind] = None
    declared_type: Optional[type] = None


class Introspector(ABC):
    """Abstract capability for looking inside values.

    Implementations decide what the children of a value are and in which
    order they are reported. The order must be stable for an unmodified
    value, since exploration order (and therefore visitor call order) is
    derived from it.
    """

    @abstractmethod
    def children(self, value: Any) -> Iterator[Child]:
        """Enumerate the outgoing edges of a non-leaf value.

        Args:
            value: The value being explored (never None)

        Returns:
            Iterator of Child tuples in positional/declaration order
        """
        pass

    @abstractmethod
    def scalar_kind_of(self, value: Any) -> Optional[ScalarKind]:
        """Return the scalar kind of a value, or None if it is not a scalar."""
        pass

    def is_primitive(self, value: Any) -> bool:
        """Check if a value is a primitive scalar."""
        return self.scalar_kind_of(value) is not None

    def is_sequence(self, value: Any) -> bool:
        """Check if a value's children are positional elements.

        Sequences report their elements before any members. Default
        implementation reports composites only.
        """
        return False


class _MemberLayout(NamedTuple):
    """Cached per-type description of the instance members."""
    slots: Tuple[Tuple[str, Any], ...]
    annotations: Dict[str, Any]


class ReflectiveIntrospector(Introspector):
    """Introspector built on Python's runtime object model.

    Sequences (list, tuple, deque, set, frozenset, dict, array.array, bytes,
    bytearray) report their elements by position, followed by the instance
    members of subclasses that add any. Every other object reports
    its instance members: the slots declared anywhere in its MRO followed by
    the entries of its instance ``__dict__``. Class-level attributes are
    shared state and are never reported.

    A member holding a scalar value is primitive. Its kind comes from the
    member's class annotation when that annotation names a scalar type
    (``ratio: float = 1`` is a double), otherwise from the value's own type.
    """

    def __init__(self, scalar_types: Optional[Mapping[type, ScalarKind]] = None):
        """Initialize the introspector.

        Args:
            scalar_types: Extra or overriding type -> ScalarKind mappings
        """
        self.scalar_types: Dict[type, ScalarKind] = dict(DEFAULT_SCALAR_TYPES)
        if scalar_types:
            self.scalar_types.update(scalar_types)
        # Names usable in string annotations ("int", "ctypes.c_short")
        self._scalar_names: Dict[str, type] = {}
        for scalar_type in self.scalar_types:
            self._scalar_names[scalar_type.__name__] = scalar_type
            self._scalar_names[f"{scalar_type.__module__}.{scalar_type.__name__}"] = scalar_type
        self._layouts: Dict[type, _MemberLayout] = {}

    def scalar_kind_of(self, value: Any) -> Optional[ScalarKind]:
        # Exact type match: bool is not int, and IntEnum members are not ints
        return self.scalar_types.get(type(value))

    def is_sequence(self, value: Any) -> bool:
        return isinstance(value, (array.array, dict) + SEQUENCE_TYPES + BYTE_SEQUENCE_TYPES)

    def children(self, value: Any) -> Iterator[Child]:
        if not self.is_sequence(value):
            return self._members(value)
        elements = self._sequence_elements(value)
        if type(value) in _PLAIN_SEQUENCE_TYPES:
            return elements
        # Subclasses may carry attributes next to their elements
        return itertools.chain(elements, self._members(value))

    def _sequence_elements(self, value: Any) -> Iterator[Child]:
        if isinstance(value, array.array):
            # Element kind is fixed by the typecode for every element
            kind = kind_for_typecode(value.typecode)
            return (Child(IndexLabel(i), item, kind) for i, item in enumerate(value))
        if isinstance(value, BYTE_SEQUENCE_TYPES):
            return (Child(IndexLabel(i), item, ScalarKind.BYTE) for i, item in enumerate(value))
        if isinstance(value, dict):
            # Keys and values interleaved, in insertion order
            flattened = [part for item in list(value.items()) for part in item]
            return self._elements(flattened)
        return self._elements(list(value))

    def _elements(self, items: List[Any]) -> Iterator[Child]:
        for i, item in enumerate(items):
            yield Child(IndexLabel(i), item, self.scalar_kind_of(item))

    def _members(self, obj: Any) -> Iterator[Child]:
        layout = self._layout(type(obj))

        for name, descriptor in layout.slots:
            try:
                member_value = descriptor.__get__(obj, type(obj))
            except AttributeError:
                continue  # unset slot
            except Exception as e:
                raise IntrospectionError(obj, name, e) from e
            yield self._member_child(layout, name, member_value)

        try:
            instance_dict = getattr(obj, '__dict__', None)
        except Exception as e:
            raise IntrospectionError(obj, '__dict__', e) from e
        if isinstance(instance_dict, dict):
            for name, member_value in list(instance_dict.items()):
                yield self._member_child(layout, str(name), member_value)

    def _member_child(self, layout: _MemberLayout, name: str, member_value: Any) -> Child:
        declared = self._declared_type(layout.annotations.get(name))
        kind = None
        if member_value is not None:
            kind = self.scalar_kind_of(member_value)
            if kind is not None and declared in self.scalar_types:
                kind = self.scalar_types[declared]
        return Child(MemberLabel(name), member_value, kind, declared)

    def _layout(self, cls: type) -> _MemberLayout:
        """Collect slot descriptors and annotations once per type."""
        layout = self._layouts.get(cls)
        if layout is not None:
            return layout

        slots: List[Tuple[str, Any]] = []
        annotations: Dict[str, Any] = {}
        # Most-derived first; a name annotated in a subclass shadows the base
        for klass in cls.__mro__:
            slot_names = klass.__dict__.get('__slots__', ())
            if isinstance(slot_names, str):
                slot_names = (slot_names,)
            for slot_name in slot_names:
                if slot_name in _IGNORED_SLOTS:
                    continue
                attr_name = _mangle(klass, slot_name)
                descriptor = klass.__dict__.get(attr_name)
                if descriptor is not None and hasattr(descriptor, '__get__'):
                    slots.append((attr_name, descriptor))

            for name, annotation in _class_annotations(klass).items():
                if _is_class_var(annotation):
                    continue
                annotations.setdefault(_mangle(klass, name), annotation)

        layout = _MemberLayout(tuple(slots), annotations)
        self._layouts[cls] = layout
        return layout

    def _declared_type(self, annotation: Any) -> Optional[type]:
        """Resolve an annotation to a concrete class where possible."""
        if annotation is None:
            return None
        if isinstance(annotation, str):
            return self._scalar_names.get(annotation.strip())
        if typing.get_origin(annotation) in _UNION_ORIGINS:
            # Optional[X] declares X
            args = [a for a in typing.get_args(annotation) if a is not type(None)]
            if len(args) == 1:
                return self._declared_type(args[0])
            return None
        if typing.get_origin(annotation) is None and isinstance(annotation, type):
            return annotation
        return None


def _mangle(klass: type, name: str) -> str:
    """Apply private name mangling the way the compiler does for ``__name``."""
    if name.startswith('__') and not name.endswith('__'):
        owner = klass.__name__.lstrip('_')
        if owner:
            return f"_{owner}{name}"
    return name


def _class_annotations(klass: type) -> Dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass))
    except NameError:
        # Unresolvable forward references only cost us declared kinds
        return {}


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.strip().startswith(('ClassVar', 'typing.ClassVar'))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar
