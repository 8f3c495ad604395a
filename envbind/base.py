"""
Reflection-based env binder.
Introspects a record, resolves env vars, coerces types and writes the fields
in place, collecting every per-field error into one BindError.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

from envbind.coerce import coerce
from envbind.descriptor import FieldDescriptor, Schema, describe
from envbind.errors import (
    BindError,
    BlankValueError,
    EnvBindError,
    FieldNotFoundError,
    InvalidAssignmentError,
    StructuralError,
)
from envbind.resolver import resolve, source_of

logger = logging.getLogger(__name__)


def _check_record(record: Any, schema: Schema | None) -> None:
    """Raise StructuralError unless record is a mutable, field-addressable instance."""
    if record is None or isinstance(record, type):
        raise StructuralError(record)

    cls = type(record)
    if dataclasses.is_dataclass(cls):
        if cls.__dataclass_params__.frozen:
            raise StructuralError(record, "frozen dataclass cannot be bound")
        return
    if isinstance(record, BaseModel):
        if record.model_config.get("frozen"):
            raise StructuralError(record, "frozen model cannot be bound")
        return
    if schema is None:
        raise StructuralError(record)
    if not hasattr(record, "__dict__") and not getattr(cls, "__slots__", None):
        raise StructuralError(record, "record has no writable attributes")


def _assign(record: Any, name: str, value: Any) -> None:
    """setattr, reporting a rejected value (validate_assignment, read-only attribute) as InvalidAssignmentError."""
    try:
        setattr(record, name, value)
    except ValidationError as e:
        reason = "; ".join(err["msg"] for err in e.errors())
        raise InvalidAssignmentError(name, reason) from e
    except (AttributeError, TypeError) as e:
        raise InvalidAssignmentError(name, str(e)) from e


@dataclass
class Binding:
    """Handle returned by bind(); pass it to rebind() for later single-field updates."""
    record: Any
    descriptors: list[FieldDescriptor]

    def descriptor(self, field_name: str) -> FieldDescriptor | None:
        return next((d for d in self.descriptors if d.name == field_name), None)

    def rebind(self, field_name: str, raw_value: str, *, legacy_separator: bool = False) -> None:
        """
        Coerce raw_value into one field, bypassing the environment and defaults.

        - field_name: attribute name on the record (not its env key)
        - raw_value: must be non-empty
        - legacy_separator: take the separator from the record's first field
          instead of the target field
        - Raises: BindError listing BlankValueError and/or FieldNotFoundError,
          or the coercion failure
        """
        errors: list[tuple[str, EnvBindError]] = []
        if raw_value == "":
            errors.append((field_name, BlankValueError(field_name)))

        target = self.descriptor(field_name)
        if target is None:
            errors.append((field_name, FieldNotFoundError(field_name)))
        elif raw_value != "":
            separator = target.separator
            if legacy_separator and self.descriptors:
                separator = self.descriptors[0].separator
                if separator != target.separator:
                    logger.warning(
                        "Rebinding %s with separator %r from first field %s (field declares %r)",
                        field_name, separator, self.descriptors[0].name, target.separator,
                    )
            try:
                _assign(self.record, field_name, coerce(target.shape, raw_value, separator))
                logger.debug("Rebound %s", field_name)
            except EnvBindError as e:
                errors.append((field_name, e))

        if errors:
            raise BindError(errors)


def bind(
    record: Any,
    *,
    environ: Mapping[str, str] | None = None,
    schema: Schema | None = None,
) -> Binding:
    """
    Populate record's fields from the environment.

    - record: mutable dataclass or pydantic model instance (any attribute-bearing
      object when schema is given)
    - environ: mapping to read from (default: os.environ). Pass a dict for tests.
    - schema: explicit descriptor table used instead of introspection
    - Returns: Binding handle for rebind()
    - Raises: StructuralError for an unusable record; BindError after visiting
      every field if any failed (fields that succeeded keep their new values)
    """
    _check_record(record, schema)
    if environ is None:
        environ = os.environ

    descriptors = schema.describe() if schema is not None else describe(record)
    errors: list[tuple[str, EnvBindError]] = []

    for d in descriptors:
        if not d.key_spec:
            logger.debug("Skipping %s: no env key", d.name)
            continue
        try:
            raw = resolve(d, environ)
            if raw == "":
                logger.debug("Skipping %s: %s unset", d.name, d.key)
                continue
            _assign(record, d.name, coerce(d.shape, raw, d.separator))
            logger.debug("Bound %s from %s (%s)", d.name, d.key, source_of(d, environ))
        except EnvBindError as e:
            errors.append((d.name, e))

    if errors:
        logger.debug("Binding %s failed for %d field(s)", type(record).__name__, len(errors))
        raise BindError(errors)

    return Binding(record=record, descriptors=descriptors)


def rebind(target: Any, field_name: str, raw_value: str, *, legacy_separator: bool = False) -> None:
    """Module-level form of Binding.rebind; target may also be a bare record."""
    if not isinstance(target, Binding):
        _check_record(target, None)
        target = Binding(record=target, descriptors=describe(target))
    target.rebind(field_name, raw_value, legacy_separator=legacy_separator)


def load(schema_class: type, *, environ: Mapping[str, str] | None = None) -> Any:
    """
    Instantiate schema_class with no arguments and bind it.
    Every field needs a class-level default. Raises BindError like bind().
    """
    if not (dataclasses.is_dataclass(schema_class) or (isinstance(schema_class, type) and issubclass(schema_class, BaseModel))):
        raise StructuralError(schema_class, "Schema must be a dataclass or pydantic model class")
    record = schema_class()
    bind(record, environ=environ)
    return record
