"""Visitor strategies for FootprintLib.

A visitor is notified about every chain the explorer reaches. It decides
whether the explorer should descend into that value and, once the
exploration finishes, produces the exploration's result.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

from .chain import Chain

T = TypeVar('T')


class Traversal(Enum):
    """Decision returned by a visitor for each visited chain."""
    EXPLORE = "explore"  # Descend into the value's children
    SKIP = "skip"        # Stop at this value


class ObjectVisitor(ABC, Generic[T]):
    """Abstract base class for exploration visitors.

    The explorer calls ``visit`` once per reached chain and ``result`` once
    when nothing is left to explore. For primitive and null leaves (only
    reported when the matching Feature is enabled) the returned decision is
    ignored, since neither can be explored further.
    """

    @abstractmethod
    def visit(self, chain: Chain) -> Traversal:
        """Inspect a chain and decide whether to explore its value.

        Args:
            chain: Position reached by the explorer

        Returns:
            Traversal.EXPLORE to descend into the value, Traversal.SKIP otherwise
        """
        pass

    @abstractmethod
    def result(self) -> T:
        """Return the value produced by the whole exploration."""
        pass


class CallbackVisitor(ObjectVisitor[T]):
    """Visitor backed by plain functions.

    Allows ad-hoc explorations without subclassing.
    """

    def __init__(self,
                 visit_func: Callable[[Chain], Traversal],
                 result_func: Optional[Callable[[], T]] = None):
        """Initialize with callbacks.

        Args:
            visit_func: Function(chain) -> Traversal
            result_func: Function() -> result (default: returns None)
        """
        self.visit_func = visit_func
        self.result_func = result_func or (lambda: None)

    def visit(self, chain: Chain) -> Traversal:
        return self.visit_func(chain)

    def result(self) -> T:
        return self.result_func()
