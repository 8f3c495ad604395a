"""envbind: bind environment variables into dataclass / pydantic config records."""

from envbind.base import Binding, bind, load, rebind
from envbind.coerce import DEFAULT_SEPARATOR, coerce
from envbind.descriptor import FieldDescriptor, Schema, describe
from envbind.duration import parse_duration
from envbind.errors import (
    BindError,
    BlankValueError,
    EnvBindError,
    FieldNotFoundError,
    InvalidAssignmentError,
    InvalidMapItemError,
    MalformedValueError,
    RequiredVariableMissingError,
    StructuralError,
    UnsupportedOptionError,
    UnsupportedTypeError,
)
from envbind.tags import (
    Default,
    Env,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Required,
    Separator,
    UInt,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    Width,
)

__all__ = [
    "bind",
    "rebind",
    "load",
    "describe",
    "coerce",
    "parse_duration",
    "Binding",
    "Schema",
    "FieldDescriptor",
    "DEFAULT_SEPARATOR",
    "Env",
    "Default",
    "Separator",
    "Required",
    "Width",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Float32",
    "Float64",
    "EnvBindError",
    "BindError",
    "StructuralError",
    "UnsupportedOptionError",
    "RequiredVariableMissingError",
    "MalformedValueError",
    "InvalidMapItemError",
    "UnsupportedTypeError",
    "FieldNotFoundError",
    "BlankValueError",
    "InvalidAssignmentError",
]
