"""cintrospect — struct layout extraction for C/C++ sources.

Scans C/C++ text for ``struct`` and ``typedef struct`` declarations and
produces struct descriptors (name plus ordered fields) for code generators
such as the bundled var-dump emitter.
"""

from cintrospect.struct_parser import StructIter, parse_c_file, parse_c_text
from cintrospect.structures import CDeclaration, CStruct

__version__ = "0.1.0"

__all__ = [
    "CDeclaration",
    "CStruct",
    "StructIter",
    "parse_c_file",
    "parse_c_text",
]
