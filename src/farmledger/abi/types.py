"""ABI parameter types as an explicit closed set of kind tags."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, model_validator

from farmledger.domain.enums import AbiKind
from farmledger.exceptions import UnsupportedType

_SIZED = re.compile(r"^(uint|int|bytes)(\d*)$")


class AbiType(BaseModel):
    """One ABI type. Arrays hold their element type; scalars hold a bit width or byte size.

    Construction raises UnsupportedType for anything outside the closed set,
    whether the type came from `parse` or was built field by field.
    """

    model_config = ConfigDict(frozen=True)

    kind: AbiKind
    bits: int | None = None  # uint/int
    size: int | None = None  # bytesN, T[N]
    element: AbiType | None = None  # T[], T[N]

    @model_validator(mode="after")
    def _check_shape(self) -> AbiType:
        kind = self.kind
        if kind in (AbiKind.UINT, AbiKind.INT):
            if self.bits is None or self.bits % 8 != 0 or not 8 <= self.bits <= 256:
                raise UnsupportedType(f"Invalid bit width {self.bits} for {kind.value}")
        elif kind == AbiKind.FIXED_BYTES:
            if self.size is None or not 1 <= self.size <= 32:
                raise UnsupportedType(f"Invalid byte size {self.size} for bytesN")
        elif kind == AbiKind.FIXED_ARRAY:
            if self.element is None or self.size is None or self.size < 1:
                raise UnsupportedType(f"Fixed array needs an element and a size >= 1, got {self.size}")
        elif kind == AbiKind.DYNAMIC_ARRAY:
            if self.element is None:
                raise UnsupportedType("Dynamic array without element type")
        return self

    def canonical(self) -> str:
        """Render the canonical name used in method signatures."""
        kind = self.kind
        if kind in (AbiKind.ADDRESS, AbiKind.BOOL, AbiKind.BYTES, AbiKind.STRING):
            return kind.value
        if kind in (AbiKind.UINT, AbiKind.INT):
            return f"{kind.value}{self.bits}"
        if kind == AbiKind.FIXED_BYTES:
            return f"bytes{self.size}"
        if kind == AbiKind.DYNAMIC_ARRAY:
            return f"{self._element().canonical()}[]"
        if kind == AbiKind.FIXED_ARRAY:
            return f"{self._element().canonical()}[{self.size}]"
        raise UnsupportedType(f"Unsupported ABI kind {kind}")

    @property
    def is_dynamic(self) -> bool:
        """True when the encoded form has no fixed size (indexed topics then carry only its hash)."""
        if self.kind in (AbiKind.BYTES, AbiKind.STRING, AbiKind.DYNAMIC_ARRAY):
            return True
        if self.kind == AbiKind.FIXED_ARRAY:
            return self._element().is_dynamic
        return False

    @property
    def is_array(self) -> bool:
        return self.kind in (AbiKind.FIXED_ARRAY, AbiKind.DYNAMIC_ARRAY)

    def _element(self) -> AbiType:
        if self.element is None:
            raise UnsupportedType(f"Array type without element: {self.kind.value}")
        return self.element

    @classmethod
    def parse(cls, text: str) -> AbiType:
        """Build a type from its textual form, e.g. "uint256", "address[]", "bytes32[4]".

        "uint" and "int" are aliases for the 256-bit forms.
        """
        text = text.strip()
        if text.endswith("]"):
            start = text.rfind("[")
            if start <= 0:
                raise UnsupportedType(f"Unsupported ABI type {text!r}")
            element = cls.parse(text[:start])
            dim = text[start + 1:-1]
            if dim == "":
                return cls(kind=AbiKind.DYNAMIC_ARRAY, element=element)
            if not dim.isdigit():
                raise UnsupportedType(f"Invalid array size in {text!r}")
            return cls(kind=AbiKind.FIXED_ARRAY, size=int(dim), element=element)

        if text == "address":
            return cls(kind=AbiKind.ADDRESS)
        if text == "bool":
            return cls(kind=AbiKind.BOOL)
        if text == "string":
            return cls(kind=AbiKind.STRING)
        if text == "bytes":
            return cls(kind=AbiKind.BYTES)

        match = _SIZED.match(text)
        if match is None:
            raise UnsupportedType(f"Unsupported ABI type {text!r}")
        base, width = match.group(1), match.group(2)
        if base == "bytes":
            return cls(kind=AbiKind.FIXED_BYTES, size=int(width))

        bits = int(width) if width else 256
        return cls(kind=AbiKind.UINT if base == "uint" else AbiKind.INT, bits=bits)


class Param(BaseModel):
    """A method/event parameter: its type and whether it is an indexed event topic."""

    model_config = ConfigDict(frozen=True)

    type: AbiType
    indexed: bool = False

    @property
    def canonical(self) -> str:
        return self.type.canonical()


def param(type_name: str, indexed: bool = False) -> Param:
    return Param(type=AbiType.parse(type_name), indexed=indexed)


def indexed(type_name: str) -> Param:
    return param(type_name, indexed=True)
