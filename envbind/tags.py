"""
Tag types for config schema definitions.
Used inside Annotated[type, ...] (or dataclasses.field(metadata=...)) to specify
env keys, defaults, separators and numeric widths.
"""

from typing import Annotated


def literal(value: object) -> str:
    """Default literal for value: strings as-is, None as "", anything else via str()."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class Env:
    """Key spec for the field: "KEY" or "KEY,option,...". Untagged fields are not bound."""

    def __init__(self, spec: str):
        self.spec = spec

    def __repr__(self) -> str:
        return f"Env({self.spec!r})"


class Default:
    """Literal used when the env var is not set. None means no default."""

    def __init__(self, value: object):
        self.value = literal(value)

    def __repr__(self) -> str:
        return f"Default({self.value!r})"


class Separator:
    """Delimiter for sequence fields (default: ",")."""

    def __init__(self, value: str):
        self.value = value

    def __repr__(self) -> str:
        return f"Separator({self.value!r})"


class Required:
    """Mark field as required; same as the "required" key-spec option."""

    pass


class Width:
    """Bit width of an int or float field."""

    def __init__(self, bits: int, unsigned: bool = False):
        self.bits = bits
        self.unsigned = unsigned

    def __repr__(self) -> str:
        kind = "unsigned" if self.unsigned else "signed"
        return f"Width({self.bits}, {kind})"


TAG_TYPES = (Env, Default, Separator, Required)

# Sized numeric shapes
Int8 = Annotated[int, Width(8)]
Int16 = Annotated[int, Width(16)]
Int32 = Annotated[int, Width(32)]
Int64 = Annotated[int, Width(64)]

UInt = Annotated[int, Width(64, unsigned=True)]
UInt8 = Annotated[int, Width(8, unsigned=True)]
UInt16 = Annotated[int, Width(16, unsigned=True)]
UInt32 = Annotated[int, Width(32, unsigned=True)]
UInt64 = Annotated[int, Width(64, unsigned=True)]

Float32 = Annotated[float, Width(32)]
Float64 = Annotated[float, Width(64)]
