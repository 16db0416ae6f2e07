"""Descriptions of the types educe derives for, read from Python classes.

A class describes a struct through its annotations: named fields by their
names, tuple fields as ``_0``, ``_1`` and so on, and a unit struct by none.
A class with nested classes and no annotations of its own is an enum whose
nested classes are its variants. Setting ``educe_kind`` to ``"union"`` (or
any ``Kind``) chooses the kind explicitly. Educe attributes of a field are
the string metadata of its ``Annotated`` type; those of a class are given
in its ``educe_attrs`` attribute.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, ClassVar, get_args, get_origin

from .errors import EduceError

_KIND_ATTR = "educe_kind"
_ATTRS_ATTR = "educe_attrs"


class Kind(Enum):
    """The kind of a type."""

    STRUCT = "struct"
    ENUM = "enum"
    UNION = "union"


@dataclass(frozen=True)
class Field:
    """A field with its position and educe attributes."""

    name: str
    index: int
    annotation: Any = None
    attributes: tuple[str, ...] = ()


@dataclass(frozen=True)
class Variant:
    """A variant of an enum."""

    name: str
    fields: tuple[Field, ...] = ()
    attributes: tuple[str, ...] = ()
    tuple_like: bool = False

    @property
    def is_unit(self) -> bool:
        return not self.fields


@dataclass(frozen=True)
class TypeShape:
    """The layout of a type: kind, fields or variants, and generics."""

    name: str
    kind: Kind
    fields: tuple[Field, ...] = ()
    variants: tuple[Variant, ...] = ()
    generics: tuple[str, ...] = ()
    attributes: tuple[str, ...] = ()
    tuple_like: bool = False

    @property
    def is_unit(self) -> bool:
        return self.kind is not Kind.ENUM and not self.fields

    @classmethod
    def from_class(cls, target: type) -> TypeShape:
        """Read the shape of ``target``."""
        fields, tuple_like = _fields(target)
        variants = _variants(target)
        kind = _kind(target, fields, variants)
        if kind is Kind.ENUM:
            fields, tuple_like = (), False
        else:
            variants = ()
        return cls(
            name=target.__name__,
            kind=kind,
            fields=fields,
            variants=variants,
            generics=_generics(target),
            attributes=_own_attributes(target),
            tuple_like=tuple_like,
        )


def _is_classvar(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _split_annotation(annotation: Any) -> tuple[Any, tuple[str, ...]]:
    if get_origin(annotation) is Annotated:
        base, *metadata = get_args(annotation)
        return base, tuple(item for item in metadata if isinstance(item, str))
    return annotation, ()


def _fields(target: type) -> tuple[tuple[Field, ...], bool]:
    annotations = vars(target).get("__annotations__", {})
    declared = [(name, ann) for name, ann in annotations.items() if not _is_classvar(ann)]
    fields = []
    for index, (name, annotation) in enumerate(declared):
        base, attributes = _split_annotation(annotation)
        fields.append(Field(name, index, base, attributes))
    tuple_like = bool(fields) and all(f.name == f"_{f.index}" for f in fields)
    return tuple(fields), tuple_like


def _own_attributes(target: type) -> tuple[str, ...]:
    raw = vars(target).get(_ATTRS_ATTR, ())
    if isinstance(raw, str):
        return (raw,)
    attributes = tuple(raw)
    if not all(isinstance(item, str) for item in attributes):
        raise EduceError(f"The `{_ATTRS_ATTR}` of `{target.__name__}` must hold strings.")
    return attributes


def _variants(target: type) -> tuple[Variant, ...]:
    variants = []
    for name, value in vars(target).items():
        if isinstance(value, type) and value.__qualname__ == f"{target.__qualname__}.{name}":
            fields, tuple_like = _fields(value)
            variants.append(Variant(name, fields, _own_attributes(value), tuple_like))
    return tuple(variants)


def _kind(target: type, fields: tuple[Field, ...], variants: tuple[Variant, ...]) -> Kind:
    raw = vars(target).get(_KIND_ATTR)
    if raw is None:
        return Kind.ENUM if variants and not fields else Kind.STRUCT
    try:
        return Kind(raw)
    except ValueError:
        choices = ", ".join(k.value for k in Kind)
        raise EduceError(
            f"Unknown kind `{raw}` for `{target.__name__}`. Available kinds are {choices}."
        ) from None


def _generics(target: type) -> tuple[str, ...]:
    params = getattr(target, "__type_params__", ()) or getattr(target, "__parameters__", ())
    return tuple(getattr(param, "__name__", str(param)) for param in params)