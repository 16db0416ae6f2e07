"""Derive Clone and Copy behaviour for classes from attribute-style declarations."""

__version__ = "0.1.0"

__all__ = [
    "clone_attrs",
    "clone_enum",
    "clone_struct",
    "copy_attrs",
    "copying",
    "derive",
    "errors",
    "meta",
    "shapes",
    "traits",
]