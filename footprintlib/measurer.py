"""Object graph measurement for FootprintLib.

This module provides the public entry point, ``measure``, which counts the
objects, references and primitive values reachable from a root. Classes,
enum members and class-level attributes are shared by the whole process and
are never counted as part of a graph.
"""

import logging
from typing import Any, Dict, Optional

from .config import DEFAULT_MAX_COUNT, MeasureConfig
from .core.chain import Chain
from .core.explorer import explore
from .core.predicates import (
    AtMostOncePredicate,
    ChainPredicate,
    ValuePredicate,
    accept_all,
    accepting_values,
    all_of,
    not_enum_or_type,
)
from .core.scalars import ScalarKind
from .core.visitor import ObjectVisitor, Traversal
from .errors import CountOverflowError, InvalidConfigError
from .footprint import Footprint

logger = logging.getLogger(__name__)


class ObjectGraphVisitor(ObjectVisitor[Footprint]):
    """Visitor that accumulates a Footprint.

    Every non-primitive chain it sees is one traversed reference, whether or
    not the referenced value is then explored, and whether or not it is None.
    Values accepted by the predicate are counted as objects and explored.
    """

    def __init__(self, predicate: ChainPredicate, max_count: int = DEFAULT_MAX_COUNT):
        self.predicate = predicate
        self.max_count = max_count
        self.objects = 0
        # -1 to account for the root, which has no reference leading to it
        self.references = -1
        self.primitives: Dict[ScalarKind, int] = {}

    def visit(self, chain: Chain) -> Traversal:
        if chain.is_primitive:
            kind = chain.scalar_kind
            count = self.primitives.get(kind, 0) + 1
            if count > self.max_count:
                raise CountOverflowError(f"too many {kind} occurrences: {count}")
            self.primitives[kind] = count
            return Traversal.SKIP

        self.references += 1
        if self.predicate(chain) and chain.value is not None:
            self.objects += 1
            return Traversal.EXPLORE
        return Traversal.SKIP

    def result(self) -> Footprint:
        return Footprint(self.objects, self.references, dict(self.primitives))


def measure(root: Any,
            acceptor: ValuePredicate = accept_all,
            config: Optional[MeasureConfig] = None) -> Footprint:
    """Measure the footprint of an object graph.

    The graph is the root plus everything reachable through instance
    members and sequence elements, excluding classes, enum members, and any
    value the acceptor rejects. Rejected values still cost the reference
    leading to them but are neither counted as objects nor explored.

    Args:
        root: Root of the object graph
        acceptor: Predicate over values; returning False stops the
            traversal from entering that value
        config: Measurement options (default: MeasureConfig.default())

    Returns:
        The Footprint of the graph

    Raises:
        ValueError: If root or acceptor is None
        InvalidConfigError: If config fails validation
        CountOverflowError: If a primitive bucket overflows
        IntrospectionError: If a member value cannot be read

    Example:
        >>> measure([1, 2.0, "three"]).object_count
        2
    """
    if root is None:
        raise ValueError("root must not be None")
    if acceptor is None:
        raise ValueError("acceptor must not be None")

    if config is None:
        config = MeasureConfig.default()
    config_errors = config.validate()
    if config_errors:
        raise InvalidConfigError(f"Invalid configuration: {'; '.join(config_errors)}")

    predicate = all_of(
        not_enum_or_type,
        accepting_values(acceptor),
        AtMostOncePredicate(),
    )
    visitor = ObjectGraphVisitor(predicate, config.max_count)
    footprint = explore(root, visitor, config.features, config.introspector)

    logger.debug("Measured %s root: %s", type(root).__name__, footprint)
    return footprint


def count_objects(root: Any, acceptor: ValuePredicate = accept_all) -> int:
    """Count distinct objects reachable from root.

    Example:
        >>> count_objects({"a": [1, 2]})
        3
    """
    return measure(root, acceptor).object_count


def count_references(root: Any, acceptor: ValuePredicate = accept_all) -> int:
    """Count references traversed below root."""
    return measure(root, acceptor).reference_count
