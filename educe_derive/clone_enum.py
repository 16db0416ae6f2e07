"""The Clone derive for enums."""

from __future__ import annotations

import builtins
import copy
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from .clone_attrs import FieldAttribute, FieldAttributeBuilder, TypeAttributeBuilder
from .errors import EduceError
from .meta import Meta, parse_meta
from .shapes import Kind, TypeShape
from .traits import Trait

Scope = Optional[Mapping[str, Any]]


@dataclass(frozen=True)
class CloneImpl:
    """A derived Clone implementation.

    ``clone(value, scope=None)`` returns a clone of ``value``.
    ``clone_from(target, source, scope=None)`` makes ``target`` a clone of
    ``source`` and returns the value the target now holds. ``scope`` maps
    names to the objects that custom clone methods and traits refer to.
    """

    type_name: str
    where_predicates: tuple[str, ...]
    copies: bool
    clone: Callable[..., Any]
    clone_from: Callable[..., Any]


@dataclass(frozen=True)
class _FieldPlan:
    name: str
    path: str | None


@dataclass(frozen=True)
class _VariantPlan:
    name: str
    fields: tuple[_FieldPlan, ...]
    tuple_like: bool

    @property
    def is_named(self) -> bool:
        return bool(self.fields) and not self.tuple_like


def _resolve(path: str, scope: Scope) -> Any:
    head, *rest = path.lstrip(":").split("::")
    if scope is not None and head in scope:
        obj = scope[head]
        remaining = rest
    else:
        obj = builtins
        remaining = [head, *rest]
    try:
        for part in remaining:
            for name in part.split("."):
                obj = getattr(obj, name)
    except AttributeError:
        raise EduceError(f"Cannot resolve the path `{path}`.") from None
    return obj


def _field_path(attribute: FieldAttribute) -> str | None:
    if attribute.clone_trait is not None:
        return f"{attribute.clone_trait}::{attribute.clone_method}"
    return attribute.clone_method


def _clone_field(plan: _FieldPlan, value: Any, scope: Scope) -> Any:
    if plan.path is None:
        return copy.deepcopy(value)
    return _resolve(plan.path, scope)(value)


def _new_instance(cls: type, values: Mapping[str, Any]) -> Any:
    obj = cls.__new__(cls)
    for name, value in values.items():
        object.__setattr__(obj, name, value)
    return obj


def _build(name: str, variants: Iterable[_VariantPlan], copies: bool):
    by_name = {variant.name: variant for variant in variants}

    def lookup(value: Any) -> _VariantPlan:
        try:
            return by_name[type(value).__name__]
        except KeyError:
            raise EduceError(
                f"`{type(value).__name__}` is not a variant of `{name}`."
            ) from None

    def clone(value: Any, scope: Scope = None) -> Any:
        variant = lookup(value)
        if copies:
            return copy.copy(value)
        return _new_instance(
            type(value),
            {f.name: _clone_field(f, getattr(value, f.name), scope) for f in variant.fields},
        )

    def clone_from(target: Any, source: Any, scope: Scope = None) -> Any:
        variant = lookup(target)
        if type(source) is type(target):
            for f in variant.fields:
                object.__setattr__(target, f.name, _clone_field(f, getattr(source, f.name), scope))
            return target
        # A variant with named fields is left as it is whatever the source holds.
        if variant.is_named:
            return target
        return clone(source, scope)

    return clone, clone_from


def derive_clone_enum(
    shape: TypeShape, traits: Iterable[Trait], meta: Meta | str
) -> CloneImpl:
    """Derive Clone for the enum ``shape`` from its ``Clone`` attribute item."""
    traits = tuple(traits)
    if isinstance(meta, str):
        meta = parse_meta(meta)
    type_attribute = TypeAttributeBuilder(enable_flag=True, enable_bound=True).from_clone_meta(meta)

    if shape.kind is not Kind.ENUM:
        raise EduceError(f"`{shape.name}` is not an enum.")

    field_builder = FieldAttributeBuilder(enable_impl=True)
    variant_builder = TypeAttributeBuilder(enable_flag=False, enable_bound=False)

    plans = []
    has_custom_clone_method = False
    for variant in shape.variants:
        variant_builder.from_attributes(variant.attributes, traits)
        fields = []
        for f in variant.fields:
            attribute = field_builder.from_attributes(f.attributes, traits)
            if attribute.clone_method is not None:
                has_custom_clone_method = True
            fields.append(_FieldPlan(f.name, _field_path(attribute)))
        plans.append(_VariantPlan(variant.name, tuple(fields), variant.tuple_like))

    copies = not has_custom_clone_method and Trait.COPY in traits
    if copies:
        predicates = type_attribute.bound.where_predicates_with_copy(shape.generics)
    else:
        predicates = type_attribute.bound.where_predicates(shape.generics)

    clone, clone_from = _build(shape.name, plans, copies)
    return CloneImpl(shape.name, tuple(predicates), copies, clone, clone_from)