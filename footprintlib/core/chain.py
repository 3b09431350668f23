"""Chain abstraction for FootprintLib.

A Chain describes how a value was reached from the root of an object graph:
the parent chain, the edge label used to get here, and the value itself.
Like a tree node in a traversal library it is only a data container; how to
find children is the job of the Introspector.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Union

from .scalars import ScalarKind


@dataclass(frozen=True)
class IndexLabel:
    """Edge label for a positional element of a sequence."""
    index: int

    def __str__(self) -> str:
        return f"[{self.index}]"


@dataclass(frozen=True)
class MemberLabel:
    """Edge label for a named member of an object."""
    name: str

    def __str__(self) -> str:
        return f".{self.name}"


EdgeLabel = Union[IndexLabel, MemberLabel]


@dataclass(frozen=True, eq=False)
class Chain:
    """Immutable, parent-pointing description of a traversal position.

    Chains compare by identity. Two chains reaching the same value through
    different edges are different chains, and the referenced values are
    never compared or copied.

    Attributes:
        value: The value at this position (owned by the traversed graph)
        parent: Chain of the referencing object, None for the root
        label: Edge from the parent to this value, None for the root
        value_type: Runtime type of ``value``, or the declared type of the
            member when ``value`` is None
        scalar_kind: Scalar kind when this position is a primitive leaf
    """
    value: Any
    parent: Optional['Chain'] = None
    label: Optional[EdgeLabel] = None
    value_type: Optional[type] = None
    scalar_kind: Optional[ScalarKind] = None
    depth: int = field(default=0, repr=False)

    def __post_init__(self):
        if (self.parent is None) != (self.label is None):
            raise ValueError("a root chain has neither parent nor label; "
                             "any other chain needs both")
        if self.value_type is None and self.value is not None:
            object.__setattr__(self, 'value_type', type(self.value))

    @classmethod
    def root(cls, value: Any) -> 'Chain':
        """Create the chain for a traversal root."""
        return cls(value)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_primitive(self) -> bool:
        """True if this chain ends at a primitive (scalar) leaf."""
        return self.scalar_kind is not None

    @property
    def root_chain(self) -> 'Chain':
        current = self
        while current.parent is not None:
            current = current.parent
        return current

    def append_index(self,
                     index: int,
                     value: Any,
                     scalar_kind: Optional[ScalarKind] = None) -> 'Chain':
        """Extend this chain through a sequence element."""
        return Chain(value, self, IndexLabel(index), None, scalar_kind,
                     self.depth + 1)

    def append_member(self,
                      name: str,
                      value: Any,
                      declared_type: Optional[type] = None,
                      scalar_kind: Optional[ScalarKind] = None) -> 'Chain':
        """Extend this chain through a named member.

        ``declared_type`` is only consulted when ``value`` is None; otherwise
        the runtime type of the value wins.
        """
        value_type = declared_type if value is None else None
        return Chain(value, self, MemberLabel(name), value_type, scalar_kind,
                     self.depth + 1)

    def __iter__(self) -> Iterator['Chain']:
        """Iterate chains from the root down to this one."""
        chains: List[Chain] = []
        current: Optional[Chain] = self
        while current is not None:
            chains.append(current)
            current = current.parent
        return reversed(chains)

    def __str__(self) -> str:
        """Render as ``<root>.member[3].other``."""
        return "<root>" + "".join(str(c.label) for c in self if c.label is not None)
