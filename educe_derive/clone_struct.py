"""The Clone derive for structs and unions, and its dispatch by kind."""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any

from .clone_attrs import FieldAttributeBuilder, TypeAttributeBuilder
from .clone_enum import (
    CloneImpl,
    Scope,
    _clone_field,
    _field_path,
    _FieldPlan,
    _new_instance,
    derive_clone_enum,
)
from .errors import EduceError
from .meta import Meta, parse_meta
from .shapes import Kind, TypeShape
from .traits import Trait


def _as_meta(meta: Meta | str) -> Meta:
    return parse_meta(meta) if isinstance(meta, str) else meta


def derive_clone_struct(
    shape: TypeShape, traits: Iterable[Trait], meta: Meta | str
) -> CloneImpl:
    """Derive Clone for the struct ``shape`` from its ``Clone`` attribute item."""
    traits = tuple(traits)
    type_attribute = TypeAttributeBuilder(enable_flag=True, enable_bound=True).from_clone_meta(
        _as_meta(meta)
    )

    if shape.kind is not Kind.STRUCT:
        raise EduceError(f"`{shape.name}` is not a struct.")

    builder = FieldAttributeBuilder(enable_impl=True)
    plans = []
    has_custom_clone_method = False
    for f in shape.fields:
        attribute = builder.from_attributes(f.attributes, traits)
        if attribute.clone_method is not None:
            has_custom_clone_method = True
        plans.append(_FieldPlan(f.name, _field_path(attribute)))

    copies = not has_custom_clone_method and Trait.COPY in traits
    if copies:
        predicates = type_attribute.bound.where_predicates_with_copy(shape.generics)
        from_plans = tuple(_FieldPlan(p.name, None) for p in plans)
    else:
        predicates = type_attribute.bound.where_predicates(shape.generics)
        from_plans = tuple(plans)

    def clone(value: Any, scope: Scope = None) -> Any:
        if copies:
            return copy.copy(value)
        return _new_instance(
            type(value),
            {p.name: _clone_field(p, getattr(value, p.name), scope) for p in plans},
        )

    def clone_from(target: Any, source: Any, scope: Scope = None) -> Any:
        for p in from_plans:
            object.__setattr__(target, p.name, _clone_field(p, getattr(source, p.name), scope))
        return target

    return CloneImpl(shape.name, tuple(predicates), copies, clone, clone_from)


def derive_clone_union(
    shape: TypeShape, traits: Iterable[Trait], meta: Meta | str
) -> CloneImpl:
    """Derive Clone for the union ``shape``; a union is cloned by copying it."""
    traits = tuple(traits)
    TypeAttributeBuilder(enable_flag=True, enable_bound=False).from_clone_meta(_as_meta(meta))

    if shape.kind is not Kind.UNION:
        raise EduceError(f"`{shape.name}` is not a union.")

    builder = FieldAttributeBuilder(enable_impl=False)
    for f in shape.fields:
        builder.from_attributes(f.attributes, traits)

    def clone(value: Any, scope: Scope = None) -> Any:
        return copy.copy(value)

    def clone_from(target: Any, source: Any, scope: Scope = None) -> Any:
        for name, value in vars(source).items():
            object.__setattr__(target, name, value)
        return target

    return CloneImpl(shape.name, (), True, clone, clone_from)


def derive_clone(shape: TypeShape, traits: Iterable[Trait], meta: Meta | str) -> CloneImpl:
    """Derive Clone for ``shape`` whatever its kind."""
    if shape.kind is Kind.ENUM:
        return derive_clone_enum(shape, traits, meta)
    if shape.kind is Kind.UNION:
        return derive_clone_union(shape, traits, meta)
    return derive_clone_struct(shape, traits, meta)