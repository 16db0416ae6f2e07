"""Type attributes of the Copy derive."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from .errors import (
    attribute_incorrect_format,
    empty_parameter,
    parameter_incorrect_format,
    reset_parameter,
    unknown_parameter,
)
from .meta import Meta, MetaList, MetaNameValue, MetaPath, parse_where_predicates, predicates_for_generics

COPY_BOUND = "Copy"

_COPY_USAGE = ("#[educe(Copy)]",)
_BOUND_USAGE = (
    "#[educe(Copy(bound))]",
    '#[educe(Copy(bound = "where_predicates"))]',
    '#[educe(Copy(bound("where_predicates")))]',
)


class BoundKind(Enum):
    """How the bounds of an implementation are chosen."""

    NONE = "none"
    AUTO = "auto"
    CUSTOM = "custom"


@dataclass(frozen=True)
class TypeAttributeBound:
    """The bound setting of a type attribute."""

    kind: BoundKind = BoundKind.NONE
    predicates: tuple[str, ...] = ()

    def where_predicates(self, params: Iterable[str]) -> tuple[str, ...]:
        """The where predicates for a type with generic ``params``."""
        if self.kind is BoundKind.AUTO:
            return predicates_for_generics(params, COPY_BOUND)
        return self.predicates


@dataclass(frozen=True)
class TypeAttribute:
    """The Copy settings given on a type."""

    bound: TypeAttributeBound = field(default_factory=TypeAttributeBound)


def _bound_texts(name: str, meta: Meta) -> Iterator[str | None]:
    if isinstance(meta, MetaPath):
        yield None
        return
    literals = meta.nested if isinstance(meta, MetaList) else (meta.lit,)
    for literal in literals:
        if not isinstance(literal, str):
            raise parameter_incorrect_format(name, _BOUND_USAGE)
        yield literal


@dataclass(frozen=True)
class TypeAttributeBuilder:
    """Reads Copy type attributes, accepting only the enabled parameters."""

    enable_bound: bool = True

    def from_copy_meta(self, meta: Meta) -> TypeAttribute:
        """Read the settings from a ``Copy`` attribute item."""
        if isinstance(meta, MetaNameValue):
            raise attribute_incorrect_format("Copy", _COPY_USAGE)
        if isinstance(meta, MetaPath):
            return TypeAttribute()

        bound: TypeAttributeBound | None = None
        for item in meta.nested:
            if not isinstance(item, (MetaPath, MetaList, MetaNameValue)):
                raise attribute_incorrect_format("Copy", _COPY_USAGE)
            if item.path != "bound" or not self.enable_bound:
                raise unknown_parameter("Copy", item.path)
            for text in _bound_texts(item.path, item):
                if bound is not None:
                    raise reset_parameter(item.path)
                if text is None:
                    bound = TypeAttributeBound(BoundKind.AUTO)
                    continue
                predicates = parse_where_predicates(text)
                if predicates is None:
                    raise empty_parameter(item.path)
                bound = TypeAttributeBound(BoundKind.CUSTOM, predicates)
        return TypeAttribute(bound or TypeAttributeBound())