"""Scalar (primitive) kinds recognised by the explorer.

A footprint buckets primitive values into a fixed set of eight kinds. This
module defines those kinds and the default mapping from Python types,
ctypes simple types and ``array.array`` typecodes onto them.
"""

import ctypes
from enum import Enum
from typing import Dict, Optional


class ScalarKind(Enum):
    """The fixed set of scalar kinds a footprint can report.

    Each member carries its storage width in bytes, for use by size
    estimators that combine a footprint with per-object shallow sizes.
    """
    BOOLEAN = ("boolean", 1)
    BYTE = ("byte", 1)
    CHAR = ("char", 2)
    SHORT = ("short", 2)
    INT = ("int", 4)
    FLOAT = ("float", 4)
    LONG = ("long", 8)
    DOUBLE = ("double", 8)

    def __init__(self, tag: str, byte_width: int):
        self.tag = tag
        self.byte_width = byte_width

    def __str__(self) -> str:
        return self.tag


# Width of a pointer-sized reference slot on the running interpreter
REFERENCE_WIDTH = ctypes.sizeof(ctypes.c_void_p)


DEFAULT_SCALAR_TYPES: Dict[type, ScalarKind] = {
    bool: ScalarKind.BOOLEAN,
    int: ScalarKind.INT,
    float: ScalarKind.DOUBLE,
    ctypes.c_bool: ScalarKind.BOOLEAN,
    ctypes.c_byte: ScalarKind.BYTE,
    ctypes.c_ubyte: ScalarKind.BYTE,
    ctypes.c_char: ScalarKind.CHAR,
    ctypes.c_wchar: ScalarKind.CHAR,
    ctypes.c_short: ScalarKind.SHORT,
    ctypes.c_ushort: ScalarKind.SHORT,
    ctypes.c_int: ScalarKind.INT,
    ctypes.c_uint: ScalarKind.INT,
    ctypes.c_long: ScalarKind.LONG,
    ctypes.c_ulong: ScalarKind.LONG,
    ctypes.c_longlong: ScalarKind.LONG,
    ctypes.c_ulonglong: ScalarKind.LONG,
    ctypes.c_float: ScalarKind.FLOAT,
    ctypes.c_double: ScalarKind.DOUBLE,
    ctypes.c_longdouble: ScalarKind.DOUBLE,
}

# Fixed-width aliases (c_int8, c_int32, ...) and same-width platform types
# are the same classes as entries above; the later entry wins.

ARRAY_TYPECODES: Dict[str, ScalarKind] = {
    'b': ScalarKind.BYTE,
    'B': ScalarKind.BYTE,
    'u': ScalarKind.CHAR,
    'w': ScalarKind.CHAR,
    'h': ScalarKind.SHORT,
    'H': ScalarKind.SHORT,
    'i': ScalarKind.INT,
    'I': ScalarKind.INT,
    'l': ScalarKind.LONG,
    'L': ScalarKind.LONG,
    'q': ScalarKind.LONG,
    'Q': ScalarKind.LONG,
    'f': ScalarKind.FLOAT,
    'd': ScalarKind.DOUBLE,
}


def kind_for_typecode(typecode: str) -> Optional[ScalarKind]:
    """Map an ``array.array`` typecode to its scalar kind (None if unknown)."""
    return ARRAY_TYPECODES.get(typecode)
