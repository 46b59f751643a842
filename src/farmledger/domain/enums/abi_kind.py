from enum import Enum


class AbiKind(str, Enum):
    """Closed set of ABI type kinds understood by the signature registry."""

    ADDRESS = "address"
    BOOL = "bool"
    UINT = "uint"
    INT = "int"
    FIXED_BYTES = "fixed_bytes"
    BYTES = "bytes"
    STRING = "string"
    FIXED_ARRAY = "fixed_array"
    DYNAMIC_ARRAY = "dynamic_array"
