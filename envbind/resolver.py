"""
Metadata resolver: key-spec parsing and environment / default lookup.
"""

from typing import Mapping

from envbind.descriptor import FieldDescriptor
from envbind.errors import RequiredVariableMissingError, UnsupportedOptionError

REQUIRED = "required"


def parse_key_spec(spec: str) -> tuple[str, list[str]]:
    """Split "KEY,opt1,opt2" into ("KEY", ["opt1", "opt2"])."""
    parts = spec.split(",")
    return parts[0], parts[1:]


def resolve(descriptor: FieldDescriptor, environ: Mapping[str, str]) -> str:
    """
    Resolve the raw string for a field.

    Precedence: environment, then default. An empty result means "leave the
    field alone". Raises UnsupportedOptionError for unknown key-spec options and
    RequiredVariableMissingError when a required key is unset with no default.
    """
    key, options = parse_key_spec(descriptor.key_spec)
    required = descriptor.required
    for option in options:
        if option == "":
            continue
        if option == REQUIRED:
            required = True
            continue
        raise UnsupportedOptionError(option, key)

    value = environ.get(key)
    if value is not None:
        return value
    if descriptor.default:
        return descriptor.default
    if required:
        raise RequiredVariableMissingError(key)
    return ""


def source_of(descriptor: FieldDescriptor, environ: Mapping[str, str]) -> str:
    """Where resolve() takes the value from: "env", "default" or "unset"."""
    key = descriptor.key
    if environ.get(key) is not None:
        return "env"
    return "default" if descriptor.default else "unset"
