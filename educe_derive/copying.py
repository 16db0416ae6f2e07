"""The Copy derive."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .copy_attrs import TypeAttributeBuilder
from .meta import Meta, parse_meta
from .shapes import TypeShape
from .traits import Trait


@dataclass(frozen=True)
class CopyImpl:
    """A derived Copy implementation: a marker with its where predicates."""

    type_name: str
    where_predicates: tuple[str, ...]


def derive_copy(shape: TypeShape, traits: Iterable[Trait], meta: Meta | str) -> CopyImpl:
    """Derive Copy for ``shape`` from its ``Copy`` attribute item."""
    if isinstance(meta, str):
        meta = parse_meta(meta)
    type_attribute = TypeAttributeBuilder(enable_bound=True).from_copy_meta(meta)
    predicates = type_attribute.bound.where_predicates(shape.generics)
    return CopyImpl(shape.name, tuple(predicates))