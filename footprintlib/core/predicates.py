"""Chain predicates used to decide which values are explored.

Predicates are plain callables ``(Chain) -> bool`` combined with ``all_of``,
which evaluates them left to right and stops at the first rejection. Order
matters: a stateful predicate placed last (such as AtMostOncePredicate) only
ever sees chains that every earlier predicate accepted.
"""

from enum import Enum
from typing import Any, Callable, Dict

from .chain import Chain

ChainPredicate = Callable[[Chain], bool]
ValuePredicate = Callable[[Any], bool]


def all_of(*predicates: ChainPredicate) -> ChainPredicate:
    """Combine predicates with short-circuit AND semantics.

    Args:
        *predicates: Predicates evaluated in the given order

    Returns:
        A predicate accepting a chain only if every predicate accepts it
    """
    def combined(chain: Chain) -> bool:
        return all(predicate(chain) for predicate in predicates)
    return combined


def not_enum_or_type(chain: Chain) -> bool:
    """Reject enum members and classes.

    Both are process-wide shared values and are not attributable to the
    cost of any single object graph.
    """
    value_type = chain.value_type
    if isinstance(value_type, type) and issubclass(value_type, Enum):
        return False
    return not isinstance(chain.value, (Enum, type))


def accepting_values(acceptor: ValuePredicate) -> ChainPredicate:
    """Adapt a predicate over values into a predicate over chains.

    The acceptor receives the value the chain ends at.
    """
    def accepts(chain: Chain) -> bool:
        return bool(acceptor(chain.value))
    return accepts


def accept_all(value: Any) -> bool:
    """Value predicate that accepts everything."""
    return True


class AtMostOncePredicate:
    """Accepts each object the first time it is seen, by identity.

    Classes are always accepted. Objects are tracked by ``id()`` rather than
    equality, so aliased objects with custom or cyclic ``__eq__`` are still
    recognised. Accepted objects are held until the predicate is discarded
    so their ids cannot be reused by other objects mid-traversal.
    """

    def __init__(self):
        self._seen: Dict[int, Any] = {}

    def __call__(self, chain: Chain) -> bool:
        value = chain.value
        if isinstance(value, type):
            return True
        key = id(value)
        if key in self._seen:
            return False
        self._seen[key] = value
        return True

    def __len__(self) -> int:
        """Number of distinct objects recorded so far."""
        return len(self._seen)
