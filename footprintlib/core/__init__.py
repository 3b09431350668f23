"""Core exploration components for FootprintLib.

Chains, visitors, introspectors, predicates and the explorer itself. These
are the building blocks for custom explorations; most users only need
``footprintlib.measure``.
"""

from .chain import Chain, EdgeLabel, IndexLabel, MemberLabel
from .explorer import explore
from .introspection import Child, Introspector, ReflectiveIntrospector
from .predicates import (
    AtMostOncePredicate,
    accept_all,
    accepting_values,
    all_of,
    not_enum_or_type,
)
from .scalars import REFERENCE_WIDTH, ScalarKind
from .visitor import CallbackVisitor, ObjectVisitor, Traversal

__all__ = [
    'Chain',
    'EdgeLabel',
    'IndexLabel',
    'MemberLabel',
    'explore',
    'Child',
    'Introspector',
    'ReflectiveIntrospector',
    'AtMostOncePredicate',
    'accept_all',
    'accepting_values',
    'all_of',
    'not_enum_or_type',
    'REFERENCE_WIDTH',
    'ScalarKind',
    'CallbackVisitor',
    'ObjectVisitor',
    'Traversal',
]
