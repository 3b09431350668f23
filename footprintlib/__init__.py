"""FootprintLib - Object Graph Footprint Measurement.

FootprintLib walks the object graph reachable from a root value and reports
its shape: how many distinct objects it contains, how many references
connect them, and how many primitive values it holds, by kind.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from footprintlib import measure

    footprint = measure(my_object)
    print(footprint)
━━━━━━━━━━━━━━━━━━━━━━━━━━

Custom explorations:
    from footprintlib.core import explore, ObjectVisitor, Traversal
"""

__version__ = "0.1.0"

from .config import ALL_FEATURES, DEFAULT_MAX_COUNT, Feature, MeasureConfig
from .core import (
    CallbackVisitor,
    Chain,
    Introspector,
    ObjectVisitor,
    ReflectiveIntrospector,
    ScalarKind,
    Traversal,
    explore,
)
from .errors import (
    CountOverflowError,
    FootprintError,
    IntrospectionError,
    InvalidConfigError,
)
from .footprint import Footprint
from .measurer import ObjectGraphVisitor, count_objects, count_references, measure

__all__ = [
    "__version__",
    # Measurement
    "measure",
    "count_objects",
    "count_references",
    "Footprint",
    "ObjectGraphVisitor",
    # Exploration
    "explore",
    "Chain",
    "ObjectVisitor",
    "CallbackVisitor",
    "Traversal",
    "Introspector",
    "ReflectiveIntrospector",
    "ScalarKind",
    # Config
    "Feature",
    "ALL_FEATURES",
    "DEFAULT_MAX_COUNT",
    "MeasureConfig",
    # Errors
    "FootprintError",
    "CountOverflowError",
    "IntrospectionError",
    "InvalidConfigError",
]
