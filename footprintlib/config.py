"""Configuration system for FootprintLib.

This module defines how users tune an exploration: which leaves the visitor
is told about, which introspector looks inside values, and the limits the
measuring visitor enforces.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, FrozenSet, List, Optional

if TYPE_CHECKING:
    from .core.introspection import Introspector


class Feature(Enum):
    """Optional behaviours of an exploration.

    Leaves are never explored. These flags only control whether the visitor
    is notified about them, and the visitor's decision for a leaf is ignored.
    """
    VISIT_NULL = "visit_null"              # Notify about members holding None
    VISIT_PRIMITIVES = "visit_primitives"  # Notify about scalar values


ALL_FEATURES: FrozenSet[Feature] = frozenset(Feature)

# Largest count a single primitive bucket may hold (signed 32-bit maximum)
DEFAULT_MAX_COUNT = 2**31 - 1


@dataclass
class MeasureConfig:
    """Complete configuration for a footprint measurement.

    The defaults reproduce a plain ``measure(root)`` call: nulls and
    primitives are both visited and the reflective introspector is used.
    """

    # Leaf visitation
    features: FrozenSet[Feature] = field(default_factory=lambda: ALL_FEATURES)

    # How values are looked into (None = ReflectiveIntrospector)
    introspector: Optional['Introspector'] = None

    # Overflow guard for primitive buckets
    max_count: int = DEFAULT_MAX_COUNT

    @classmethod
    def default(cls) -> 'MeasureConfig':
        """Create the configuration used by ``measure`` when none is given."""
        return cls()

    @classmethod
    def objects_only(cls) -> 'MeasureConfig':
        """Create config that ignores primitive and null leaves.

        Primitive histograms stay empty and null members are not counted
        as references.
        """
        return cls(features=frozenset())

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        unknown = [f for f in self.features if not isinstance(f, Feature)]
        if unknown:
            errors.append(f"unknown features: {', '.join(map(repr, unknown))}")

        if isinstance(self.max_count, bool) or not isinstance(self.max_count, int):
            errors.append("max_count must be an integer")
        elif self.max_count <= 0:
            errors.append("max_count must be positive")

        if self.introspector is not None:
            if not (callable(getattr(self.introspector, 'children', None))
                    and callable(getattr(self.introspector, 'scalar_kind_of', None))):
                errors.append("introspector must provide children() and scalar_kind_of()")

        return errors
