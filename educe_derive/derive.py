"""The educe decorator: derive traits for a class from its educe attributes."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from .clone_enum import CloneImpl
from .clone_struct import derive_clone
from .copying import derive_copy
from .errors import (
    EduceError,
    derive_attribute_not_set_up_yet,
    educe_format_incorrect,
    reuse_a_trait,
)
from .meta import Meta, MetaList, MetaNameValue, MetaPath, parse_meta
from .shapes import Kind, TypeShape
from .traits import Trait

_HANDLERS: dict[Trait, Callable[..., Any]] = {
    Trait.CLONE: derive_clone,
    Trait.COPY: derive_copy,
}
_META_TYPES = (MetaPath, MetaList, MetaNameValue)


def _to_meta(attribute: str | Meta) -> Meta:
    if not isinstance(attribute, str):
        return attribute
    text = attribute.strip()
    if text.startswith("#[") and text.endswith("]"):
        text = text[2:-1]
    return parse_meta(text)


def collect_trait_metas(attributes: Iterable[str | Meta]) -> dict[Trait, Meta]:
    """Map each trait named in the educe attributes to its item, in trait order."""
    found: dict[Trait, Meta] = {}
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
            if t in found:
                raise reuse_a_trait(t)
            found[t] = item
    return dict(sorted(found.items(), key=lambda entry: entry[0]))


def _install_clone(target: type, impl: CloneImpl) -> None:
    def clone(self, scope=None):
        """Return a clone of this value."""
        return impl.clone(self, scope)

    def clone_from(self, source, scope=None):
        """Make this value a clone of ``source``."""
        return impl.clone_from(self, source, scope)

    target.clone = clone
    target.clone_from = clone_from


def _apply(cls: type, items: tuple[str, ...]) -> type:
    shape = TypeShape.from_class(cls)
    attributes = shape.attributes
    if items:
        attributes += (f"educe({', '.join(items)})",)
    metas = collect_trait_metas(attributes)
    if not metas:
        raise derive_attribute_not_set_up_yet("Educe")

    traits = tuple(metas)
    for t in traits:
        if t not in _HANDLERS:
            available = ", ".join(str(h) for h in _HANDLERS)
            raise EduceError(f"Unsupported trait `{t}`. Available traits are [{available}]")

    impls = {t: _HANDLERS[t](shape, traits, meta) for t, meta in metas.items()}

    clone_impl = impls.get(Trait.CLONE)
    if clone_impl is not None:
        _install_clone(cls, clone_impl)
        if shape.kind is Kind.ENUM:
            for variant in shape.variants:
                _install_clone(getattr(cls, variant.name), clone_impl)

    cls.educe_impls = impls
    return cls


def educe(*args: Any) -> Any:
    """Derive traits for a class.

    Used as ``@educe("Clone", "Copy(bound)")`` the arguments are the trait
    items; used bare as ``@educe`` only the class's ``educe_attrs`` count.
    """
    if len(args) == 1 and isinstance(args[0], type):
        return _apply(args[0], ())
    if not all(isinstance(arg, str) for arg in args):
        raise TypeError("educe takes trait items as strings")

    def decorate(cls: type) -> type:
        return _apply(cls, args)

    return decorate