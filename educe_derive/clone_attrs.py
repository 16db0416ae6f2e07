"""Field and type attributes of the Clone derive."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from .copy_attrs import COPY_BOUND
from .errors import (
    attribute_incorrect_format,
    educe_format_incorrect,
    empty_parameter,
    parameter_incorrect_format,
    reset_parameter,
    reuse_a_trait,
    trait_not_used,
    unknown_parameter,
)
from .meta import (
    Meta,
    MetaList,
    MetaNameValue,
    MetaPath,
    parse_meta,
    parse_path,
    parse_where_predicates,
    predicates_for_generics,
)
from .traits import Trait

__all__ = [
    "CLONE_BOUND",
    "BoundKind",
    "FieldAttribute",
    "FieldAttributeBuilder",
    "TypeAttribute",
    "TypeAttributeBound",
    "TypeAttributeBuilder",
]

CLONE_BOUND = "Clone"

_IMPL_USAGE = (
    '#[educe(Clone(method = "path_to_method"))]',
    '#[educe(Clone(trait = "path_to_trait"))]',
    '#[educe(Clone(trait = "path_to_trait", method = "path_to_method_in_trait"))]',
    '#[educe(Clone(method("path_to_method")))]',
    '#[educe(Clone(trait("path_to_trait")))]',
    '#[educe(Clone(trait("path_to_trait"), method("path_to_method_in_trait")))]',
)
_BOUND_USAGE = (
    "#[educe(Clone(bound))]",
    '#[educe(Clone(bound = "where_predicates"))]',
    '#[educe(Clone(bound("where_predicates")))]',
)
_META_TYPES = (MetaPath, MetaList, MetaNameValue)


class BoundKind(Enum):
    """How the where predicates of an implementation are chosen."""

    NONE = "none"
    AUTO = "auto"
    CUSTOM = "custom"


def _to_meta(attribute: str | Meta) -> Meta:
    if not isinstance(attribute, str):
        return attribute
    text = attribute.strip()
    if text.startswith("#[") and text.endswith("]"):
        text = text[2:-1]
    return parse_meta(text)


def _educe_items(attributes: Iterable[str | Meta], traits: Iterable[Trait]) -> Iterator[Meta]:
    """Yield the ``Clone`` items of the educe attributes, checking every trait named."""
    used = set(traits)
    for attribute in attributes:
        meta = _to_meta(attribute)
        if meta.path != "educe":
            continue
        if not isinstance(meta, MetaList):
            raise educe_format_incorrect()
        for item in meta.nested:
            if not isinstance(item, _META_TYPES):
                raise educe_format_incorrect()
            t = Trait.from_str(item.path)
            if t not in used:
                raise trait_not_used(t)
            if t is Trait.CLONE:
                yield item


def _string_values(name: str, meta: Meta, usage: tuple[str, ...]) -> Iterator[str]:
    if isinstance(meta, MetaPath):
        raise parameter_incorrect_format(name, usage)
    literals = meta.nested if isinstance(meta, MetaList) else (meta.lit,)
    for literal in literals:
        if not isinstance(literal, str) or isinstance(literal, bool):
            raise parameter_incorrect_format(name, usage)
        yield literal


@dataclass(frozen=True)
class FieldAttribute:
    """The Clone settings given on a field."""

    clone_method: str | None = None
    clone_trait: str | None = None


@dataclass(frozen=True)
class FieldAttributeBuilder:
    """Reads Clone field attributes, accepting only the enabled parameters."""

    enable_impl: bool = True

    def from_clone_meta(self, meta: Meta) -> FieldAttribute:
        """Read the settings from a ``Clone`` attribute item."""
        if not isinstance(meta, MetaList):
            raise attribute_incorrect_format("Clone", ())

        values: dict[str, str] = {}
        for item in meta.nested:
            if not isinstance(item, _META_TYPES):
                raise attribute_incorrect_format("Clone", ())
            name = item.path
            if name not in ("method", "trait") or not self.enable_impl:
                raise unknown_parameter("Clone", name)
            for text in _string_values(name, item, _IMPL_USAGE):
                if name in values:
                    raise reset_parameter(name)
                path = parse_path(text)
                if path is None:
                    raise empty_parameter(name)
                values[name] = path

        clone_trait = values.get("trait")
        clone_method = values.get("method")
        if clone_trait is not None and clone_method is None:
            clone_method = "clone"
        return FieldAttribute(clone_method, clone_trait)

    def from_attributes(
        self, attributes: Iterable[str | Meta], traits: Iterable[Trait]
    ) -> FieldAttribute:
        """Read the Clone settings from all the educe attributes of a field."""
        result: FieldAttribute | None = None
        for item in _educe_items(attributes, traits):
            if result is not None:
                raise reuse_a_trait(Trait.CLONE)
            result = self.from_clone_meta(item)
        return result or FieldAttribute()


@dataclass(frozen=True)
class TypeAttributeBound:
    """The bound setting of a Clone type attribute."""

    kind: BoundKind = BoundKind.NONE
    predicates: tuple[str, ...] = ()

    def _predicates(self, params: Iterable[str], bound: str) -> tuple[str, ...]:
        if self.kind is BoundKind.AUTO:
            return predicates_for_generics(params, bound)
        return self.predicates

    def where_predicates(self, params: Iterable[str]) -> tuple[str, ...]:
        """The where predicates for a Clone implementation."""
        return self._predicates(params, CLONE_BOUND)

    def where_predicates_with_copy(self, params: Iterable[str]) -> tuple[str, ...]:
        """The where predicates for a Clone implementation that copies."""
        return self._predicates(params, COPY_BOUND)


@dataclass(frozen=True)
class TypeAttribute:
    """The Clone settings given on a type or a variant."""

    flag: bool = False
    bound: TypeAttributeBound = field(default_factory=TypeAttributeBound)


@dataclass(frozen=True)
class TypeAttributeBuilder:
    """Reads Clone type attributes, accepting only the enabled parameters."""

    enable_flag: bool = True
    enable_bound: bool = True

    def from_clone_meta(self, meta: Meta) -> TypeAttribute:
        """Read the settings from a ``Clone`` attribute item."""
        usage = ("#[educe(Clone)]",) if self.enable_flag else ()

        if isinstance(meta, MetaNameValue):
            raise attribute_incorrect_format("Clone", usage)
        if isinstance(meta, MetaPath):
            if not self.enable_flag:
                raise attribute_incorrect_format("Clone", usage)
            return TypeAttribute(flag=True)

        bound: TypeAttributeBound | None = None
        for item in meta.nested:
            if not isinstance(item, _META_TYPES):
                raise attribute_incorrect_format("Clone", usage)
            name = item.path
            if name != "bound" or not self.enable_bound:
                raise unknown_parameter("Clone", name)
            if isinstance(item, MetaPath):
                if bound is not None:
                    raise reset_parameter(name)
                bound = TypeAttributeBound(BoundKind.AUTO)
                continue
            for text in _string_values(name, item, _BOUND_USAGE):
                if bound is not None:
                    raise reset_parameter(name)
                predicates = parse_where_predicates(text)
                if predicates is None:
                    raise empty_parameter(name)
                bound = TypeAttributeBound(BoundKind.CUSTOM, predicates)
        return TypeAttribute(False, bound or TypeAttributeBound())

    def from_attributes(
        self, attributes: Iterable[str | Meta], traits: Iterable[Trait]
    ) -> TypeAttribute:
        """Read the Clone settings from all the educe attributes of a type."""
        result: TypeAttribute | None = None
        for item in _educe_items(attributes, traits):
            if result is not None:
                raise reuse_a_trait(Trait.CLONE)
            result = self.from_clone_meta(item)
        return result or TypeAttribute()