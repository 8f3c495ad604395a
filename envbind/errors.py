"""
Exceptions raised while binding env vars into a record.
Per-field errors are collected and raised together as a BindError.
"""


class EnvBindError(Exception):
    """Base class for every envbind error."""


class StructuralError(EnvBindError, TypeError):
    """The target is not a mutable, field-addressable record."""

    def __init__(self, target: object, reason: str = "expected a mutable dataclass or pydantic model instance"):
        self.target = target
        super().__init__(f"{reason}, got {type(target).__name__}")


class UnsupportedOptionError(EnvBindError, ValueError):
    def __init__(self, option: str, key: str):
        self.option = option
        self.key = key
        super().__init__(f"option {option!r} not supported (key {key})")


class RequiredVariableMissingError(EnvBindError, LookupError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"environment variable {key} is required but not set")


class MalformedValueError(EnvBindError, ValueError):
    """A numeric, boolean or duration value failed to parse. The parser error is chained as __cause__."""

    def __init__(self, raw: str, kind: str, reason: str):
        self.raw = raw
        self.kind = kind
        self.reason = reason
        super().__init__(f"cannot parse {raw!r} as {kind}: {reason}")


class InvalidMapItemError(EnvBindError, ValueError):
    def __init__(self, item: str):
        self.item = item
        super().__init__(f"invalid map item: {item!r}")


class UnsupportedTypeError(EnvBindError, TypeError):
    def __init__(self, shape: object):
        self.shape = shape
        super().__init__(f"unsupported type: {shape!r}")


class FieldNotFoundError(EnvBindError, LookupError):
    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"field {field_name} not found")


class BlankValueError(EnvBindError, ValueError):
    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"value for {field_name} is blank")


class InvalidAssignmentError(EnvBindError, ValueError):
    """The record refused the coerced value (e.g. a pydantic validate_assignment check). Chained as __cause__."""

    def __init__(self, field_name: str, reason: str):
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"cannot assign {field_name}: {reason}")


class BindError(EnvBindError):
    """Raised when one or more fields failed to resolve or coerce."""

    def __init__(self, errors: list[tuple[str, EnvBindError]]):
        self.errors = errors
        lines = [f"  {field}: {err}" for field, err in errors]
        super().__init__("Config binding failed:\n" + "\n".join(lines))

    def for_field(self, field_name: str) -> list[EnvBindError]:
        return [err for field, err in self.errors if field == field_name]
