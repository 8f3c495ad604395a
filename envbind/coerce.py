"""
Value coercion: turn a raw env string into a field's declared shape.
Dispatches on the type hint; sequence and mapping elements are coerced one
level deep as scalars.
"""

import re
import struct
import types
from datetime import timedelta
from typing import Annotated, Any, Union, get_args, get_origin

from envbind.duration import parse_duration
from envbind.errors import InvalidMapItemError, MalformedValueError, UnsupportedTypeError
from envbind.tags import Width

DEFAULT_SEPARATOR = ","
MAP_ITEM_SEPARATOR = ","
MAP_KV_SEPARATOR = ":"

_TRUE = ("1", "t", "true")
_FALSE = ("0", "f", "false")

_INT_WIDTHS = (8, 16, 32, 64)
_FLOAT_WIDTHS = (32, 64)

# Leading-zero octal, e.g. "0755"
_LEGACY_OCTAL = re.compile(r"[+-]?0[0-7]+")


def _unwrap_annotated(hint: Any) -> tuple[Any, Width | None]:
    """Strip Annotated[...] and return the base hint plus any Width tag."""
    if get_origin(hint) is not Annotated:
        return hint, None
    args = get_args(hint)
    width = next((m for m in args[1:] if isinstance(m, Width)), None)
    return args[0], width


def _optional_inner(hint: Any) -> Any | None:
    """Return T for Optional[T] / T | None, else None."""
    origin = get_origin(hint)
    if origin is not Union and origin is not types.UnionType:
        return None
    args = [a for a in get_args(hint) if a is not type(None)]
    if len(args) != 1 or len(args) == len(get_args(hint)):
        return None
    return args[0]


def _coerce_int(raw: str, width: Width | None) -> int:
    bits = width.bits if width else 64
    unsigned = width.unsigned if width else False
    kind = f"{'uint' if unsigned else 'int'}{bits}"
    if bits not in _INT_WIDTHS:
        raise UnsupportedTypeError(f"{kind} (integer width must be one of {_INT_WIDTHS})")
    if raw != raw.strip() or (unsigned and raw[:1] in ("-", "+")):
        raise MalformedValueError(raw, kind, "invalid syntax")
    try:
        value = int(raw, 8) if _LEGACY_OCTAL.fullmatch(raw) else int(raw, 0)
    except ValueError as e:
        raise MalformedValueError(raw, kind, "invalid syntax") from e

    if unsigned:
        low, high = 0, (1 << bits) - 1
    else:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    if not low <= value <= high:
        raise MalformedValueError(raw, kind, "value out of range")
    return value


def _coerce_float(raw: str, width: Width | None) -> float:
    bits = width.bits if width else 64
    kind = f"float{bits}"
    if bits not in _FLOAT_WIDTHS or (width and width.unsigned):
        raise UnsupportedTypeError(f"{kind} (float width must be one of {_FLOAT_WIDTHS})")
    if raw != raw.strip() or "_" in raw:
        raise MalformedValueError(raw, kind, "invalid syntax")
    try:
        value = float(raw)
    except ValueError as e:
        raise MalformedValueError(raw, kind, "invalid syntax") from e
    if bits == 32:
        try:
            value = struct.unpack("<f", struct.pack("<f", value))[0]
        except OverflowError as e:
            raise MalformedValueError(raw, kind, "value out of range") from e
    return value


def _coerce_bool(raw: str) -> bool:
    v = raw.lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise MalformedValueError(raw, "bool", "invalid syntax")


def _coerce_duration(raw: str) -> timedelta:
    try:
        return parse_duration(raw)
    except ValueError as e:
        raise MalformedValueError(raw, "duration", str(e)) from e


def _coerce_scalar(hint: Any, raw: str) -> Any:
    """Coerce into a scalar or Optional[scalar]; composites are rejected."""
    inner = _optional_inner(hint)
    if inner is not None:
        return _coerce_scalar(inner, raw)

    base, width = _unwrap_annotated(hint)
    if base is str:
        return raw
    if base is bool:
        return _coerce_bool(raw)
    if base is int:
        return _coerce_int(raw, width)
    if base is float:
        return _coerce_float(raw, width)
    if base is timedelta:
        return _coerce_duration(raw)
    raise UnsupportedTypeError(hint)


def _sequence_item_type(base: Any) -> tuple[type, Any] | None:
    """Return (container, element hint) for list[T] / tuple[T, ...], else None."""
    if base is list:
        return list, str
    origin = get_origin(base)
    args = get_args(base)
    if origin is list and len(args) == 1:
        return list, args[0]
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return tuple, args[0]
    return None


def _mapping_item_types(base: Any) -> tuple[Any, Any] | None:
    if base is dict:
        return str, str
    if get_origin(base) is dict and len(get_args(base)) == 2:
        return get_args(base)
    return None


def _coerce_sequence(container: type, item_hint: Any, raw: str, separator: str) -> Any:
    tokens = raw.split(separator or DEFAULT_SEPARATOR)
    return container(_coerce_scalar(item_hint, token) for token in tokens)


def _coerce_mapping(key_hint: Any, value_hint: Any, raw: str) -> dict:
    result = {}
    if not raw.strip():
        return result
    for item in raw.split(MAP_ITEM_SEPARATOR):
        parts = item.split(MAP_KV_SEPARATOR)
        if len(parts) != 2:
            raise InvalidMapItemError(item)
        key = _coerce_scalar(key_hint, parts[0])
        result[key] = _coerce_scalar(value_hint, parts[1])
    return result


def coerce(hint: Any, raw: str, separator: str = "") -> Any:
    """
    Convert raw into a value of the shape described by hint.

    - hint: field type hint (str, int, Int32, float, bool, timedelta,
      Optional[T], list[T], tuple[T, ...], dict[K, V])
    - raw: string from the environment, a default, or a rebind call
    - separator: delimiter for sequence shapes ("" means ",")
    - Returns: the coerced value; nothing is assigned here
    - Raises: MalformedValueError, InvalidMapItemError, UnsupportedTypeError
    """
    inner = _optional_inner(hint)
    if inner is not None:
        return coerce(inner, raw, separator)

    base, _ = _unwrap_annotated(hint)
    sequence = _sequence_item_type(base)
    if sequence is not None:
        container, item_hint = sequence
        return _coerce_sequence(container, item_hint, raw, separator)
    mapping = _mapping_item_types(base)
    if mapping is not None:
        return _coerce_mapping(mapping[0], mapping[1], raw)
    return _coerce_scalar(hint, raw)
