"""
Field descriptor tables.
Introspects a dataclass or pydantic model (or takes an explicit Schema) and
produces one FieldDescriptor per field, in declaration order.
"""

import dataclasses
from dataclasses import dataclass
from typing import Annotated, Any, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from envbind.tags import TAG_TYPES, Default, Env, Required, Separator, literal

# Plain-string metadata keys accepted in dataclasses.field(metadata=...)
ENV_KEY = "env"
DEFAULT_KEY = "envDefault"
SEPARATOR_KEY = "envSeparator"


@dataclass
class FieldDescriptor:
    """Static description of one bindable field."""
    name: str
    shape: Any
    key_spec: str = ""
    default: str = ""
    separator: str = ""
    required: bool = False

    @property
    def key(self) -> str:
        return self.key_spec.split(",")[0]


def _apply_tags(descriptor: FieldDescriptor, tags: list[Any]) -> FieldDescriptor:
    for tag in tags:
        if isinstance(tag, Env):
            descriptor.key_spec = tag.spec
        elif isinstance(tag, Default):
            descriptor.default = tag.value
        elif isinstance(tag, Separator):
            descriptor.separator = tag.value
        elif isinstance(tag, Required) or tag is Required:
            descriptor.required = True
    return descriptor


def _split_annotated(hint: Any) -> tuple[Any, list[Any]]:
    """Separate envbind tags from the shape; other Annotated extras (e.g. Width) stay on the shape."""
    if get_origin(hint) is not Annotated:
        return hint, []
    args = get_args(hint)
    base = args[0]
    tags = [m for m in args[1:] if isinstance(m, TAG_TYPES) or m is Required]
    rest = [m for m in args[1:] if not (isinstance(m, TAG_TYPES) or m is Required)]
    if rest:
        return Annotated[(base, *rest)], tags
    return base, tags


def _metadata_tags(metadata: Any) -> list[Any]:
    """Tags from dataclasses.field(metadata=...): tag objects or the env/envDefault/envSeparator keys."""
    tags: list[Any] = []
    for key, value in (metadata or {}).items():
        if key == ENV_KEY:
            tags.append(Env(value))
        elif key == DEFAULT_KEY:
            tags.append(Default(value))
        elif key == SEPARATOR_KEY:
            tags.append(Separator(value))
        elif isinstance(value, TAG_TYPES) or value is Required:
            tags.append(value)
    return tags


def _describe_dataclass(cls: type) -> list[FieldDescriptor]:
    hints = get_type_hints(cls, include_extras=True)
    descriptors = []
    for f in dataclasses.fields(cls):
        shape, tags = _split_annotated(hints.get(f.name, f.type))
        tags = _metadata_tags(f.metadata) + tags
        descriptors.append(_apply_tags(FieldDescriptor(name=f.name, shape=shape), tags))
    return descriptors


def _describe_model(cls: type) -> list[FieldDescriptor]:
    # pydantic moves Annotated extras into FieldInfo.metadata and strips them from the annotation
    descriptors = []
    for name, info in cls.model_fields.items():
        shape, tags = _split_annotated(Annotated[(info.annotation, *info.metadata)] if info.metadata else info.annotation)
        descriptors.append(_apply_tags(FieldDescriptor(name=name, shape=shape), tags))
    return descriptors


def describe(record: Any) -> list[FieldDescriptor]:
    """
    Build the descriptor table for a dataclass or pydantic model (instance or class).
    Raises TypeError for anything else.
    """
    cls = record if isinstance(record, type) else type(record)
    if dataclasses.is_dataclass(cls):
        return _describe_dataclass(cls)
    if issubclass(cls, BaseModel):
        return _describe_model(cls)
    raise TypeError(f"Cannot describe {cls.__name__}: expected a dataclass or pydantic model")


class Schema:
    """
    Explicit descriptor table, for records that cannot be introspected
    or when field registration should be spelled out by hand.

        schema = (
            Schema()
            .field("port", int, env="PORT", default="8080")
            .field("hosts", list[str], env="HOSTS", separator=":")
        )
    """

    def __init__(self):
        self._fields: list[FieldDescriptor] = []

    def field(
        self,
        name: str,
        shape: Any,
        *,
        env: str = "",
        default: object = "",
        separator: str = "",
        required: bool = False,
    ) -> "Schema":
        if any(d.name == name for d in self._fields):
            raise ValueError(f"Field {name} already registered")
        self._fields.append(
            FieldDescriptor(
                name=name,
                shape=shape,
                key_spec=env,
                default=literal(default),
                separator=separator,
                required=required,
            )
        )
        return self

    def describe(self) -> list[FieldDescriptor]:
        return [dataclasses.replace(d) for d in self._fields]

    def __len__(self) -> int:
        return len(self._fields)
