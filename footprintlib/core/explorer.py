"""Depth-first object graph explorer.

The explorer walks everything reachable from a root value, using an explicit
stack instead of recursion so that deeply nested graphs cannot exhaust the
interpreter's call stack. It works with any Introspector and is steered by
an ObjectVisitor, which decides at every value whether to go deeper and
builds the final result.
"""

import logging
from collections import deque
from typing import AbstractSet, Any, Deque, List, Optional, TypeVar

from ..config import Feature
from .chain import Chain, IndexLabel
from .introspection import Child, Introspector, ReflectiveIntrospector
from .visitor import ObjectVisitor, Traversal

logger = logging.getLogger(__name__)

T = TypeVar('T')


def explore(root: Any,
            visitor: ObjectVisitor[T],
            features: AbstractSet[Feature] = frozenset(),
            introspector: Optional[Introspector] = None) -> T:
    """Explore an object graph, letting a visitor control the traversal.

    Starting at ``root``, the visitor is asked about every reachable value.
    When it answers Traversal.EXPLORE the value's children are enumerated:

    - Primitive children are reported to the visitor only if
      Feature.VISIT_PRIMITIVES is requested.
    - Children holding None are reported only if Feature.VISIT_NULL is
      requested.
    - Every other child is queued and reported when its turn comes,
      regardless of whether it was seen before. Cycle and sharing handling
      is the visitor's job.

    The visitor's answer for primitive and None leaves is ignored. Siblings
    are reported in ascending position/declaration order and the overall
    order is a pre-order walk, identical across runs on an unchanged graph.

    Args:
        root: Value to start from (must not be None)
        visitor: Decides which values to explore and produces the result
        features: Leaf kinds the visitor should be told about
        introspector: How to look inside values (default: ReflectiveIntrospector)

    Returns:
        Whatever ``visitor.result()`` returns once the graph is exhausted

    Raises:
        ValueError: If root is None
        TypeError: If the visitor returns something other than a Traversal
    """
    if root is None:
        raise ValueError("root must not be None")
    if introspector is None:
        introspector = ReflectiveIntrospector()

    visit_nulls = Feature.VISIT_NULL in features
    visit_primitives = Feature.VISIT_PRIMITIVES in features

    logger.debug("Exploring %s root (features=%s)",
                 type(root).__name__, sorted(f.value for f in features))

    stack: Deque[Chain] = deque([Chain.root(root)])
    popped = 0
    max_stack = 1

    while stack:
        chain = stack.pop()
        popped += 1

        # The only place where the visitor's decision is honoured
        traversal = visitor.visit(chain)
        if traversal is Traversal.SKIP:
            continue
        if traversal is not Traversal.EXPLORE:
            raise TypeError(
                f"{type(visitor).__name__}.visit() must return a Traversal, "
                f"got {traversal!r}"
            )

        pending: List[Chain] = []
        for child in introspector.children(chain.value):
            if child.value is None:
                if visit_nulls:
                    visitor.visit(_extend(chain, child))
                continue
            if child.scalar_kind is not None:
                if visit_primitives:
                    visitor.visit(_extend(chain, child))
                continue
            pending.append(_extend(chain, child))

        # Reverse so the first child is popped first
        stack.extend(reversed(pending))
        if len(stack) > max_stack:
            max_stack = len(stack)

    logger.debug("Exploration finished: %d chains visited, max stack depth %d",
                 popped, max_stack)
    return visitor.result()


def _extend(chain: Chain, child: Child) -> Chain:
    if isinstance(child.label, IndexLabel):
        return chain.append_index(child.label.index, child.value, child.scalar_kind)
    return chain.append_member(child.label.name, child.value,
                               child.declared_type, child.scalar_kind)
