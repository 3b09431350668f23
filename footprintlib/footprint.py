"""The footprint of an object graph."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .core.scalars import ScalarKind


@dataclass(frozen=True)
class Footprint:
    """Immutable summary of one object graph measurement.

    Attributes:
        object_count: Number of distinct objects explored
        reference_count: Number of references traversed below the root
        primitives: Read-only mapping of ScalarKind to occurrence count,
            ordered like ScalarKind
    """
    object_count: int
    reference_count: int
    primitives: Mapping[ScalarKind, int] = field(default_factory=dict)

    def __post_init__(self):
        if self.object_count < 0:
            raise ValueError(f"object_count must be non-negative, got {self.object_count}")
        if self.reference_count < 0:
            raise ValueError(f"reference_count must be non-negative, got {self.reference_count}")
        foreign = [k for k in self.primitives if not isinstance(k, ScalarKind)]
        if foreign:
            raise ValueError(f"primitive keys must be ScalarKind members, got {foreign!r}")
        if any(count < 0 for count in self.primitives.values()):
            raise ValueError("primitive counts must be non-negative")

        ordered = {kind: self.primitives[kind] for kind in ScalarKind if kind in self.primitives}
        object.__setattr__(self, 'primitives', MappingProxyType(ordered))

    def primitive_count(self, kind: ScalarKind) -> int:
        """Occurrences of one scalar kind (0 if none were seen)."""
        return self.primitives.get(kind, 0)

    @property
    def total_primitives(self) -> int:
        return sum(self.primitives.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Footprint):
            return NotImplemented
        return (self.object_count == other.object_count
                and self.reference_count == other.reference_count
                and dict(self.primitives) == dict(other.primitives))

    def __hash__(self) -> int:
        return hash((self.object_count, self.reference_count,
                     tuple(self.primitives.items())))

    def __str__(self) -> str:
        rendered = ", ".join(f"{kind}={count}" for kind, count in self.primitives.items())
        return (f"Footprint {{objects={self.object_count}, "
                f"references={self.reference_count}, primitives={{{rendered}}}}}")
