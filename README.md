# educe-derive

Declare `Clone` and `Copy` behaviour for Python classes with short
attribute-style strings such as `"Clone"`, `"Copy(bound)"` or
`'Clone(method = "bump")'`, and have `clone` and `clone_from` methods
generated for them.

## Installation

```
pip install educe-derive
```

There are no runtime dependencies. To run the tests:

```
pip install "educe-derive[test]"
pytest
```

## Describing a type

`educe_derive.shapes.TypeShape.from_class(cls)` reads a class as one of
three kinds (`educe_derive.shapes.Kind`):

- **struct** – a class with annotated fields. Fields named `_0`, `_1`, …
  make it tuple-like; a class with no fields is a unit struct.
- **enum** – a class with no annotations of its own whose nested classes are
  its variants (each variant may be unit, tuple-like or have named fields).
- **union** – any class with `educe_kind = "union"`.

The kind can always be forced with `educe_kind` (`"struct"`, `"enum"`,
`"union"`). Generic parameters are taken from `Generic[...]` (or PEP 695
type parameters). Educe attributes of a field are the string metadata of an
`Annotated` annotation; those of a class or variant are given in its
`educe_attrs` attribute (a string or a tuple of strings, with or without
the surrounding `#[...]`).

## Deriving

```python
from dataclasses import dataclass
from typing import Annotated, Generic, TypeVar

from educe_derive.derive import educe
from educe_derive.traits import Trait


@educe("Clone")
@dataclass
class Point:
    x: int
    y: list


p = Point(1, [2])
q = p.clone()              # fields are deep-copied
assert q.y == [2] and q.y is not p.y


def bump(value):
    return value + 100


@educe("Clone")
@dataclass
class Counter:
    n: Annotated[int, 'educe(Clone(method = "bump"))']


assert Counter(1).clone(scope={"bump": bump}).n == 101


@educe("Clone")
class Shape:
    class Unit:
        pass

    @dataclass
    class Tuple:
        _0: int

    @dataclass
    class Struct:
        f1: int


assert Shape.Struct(1).clone().f1 == 1


T = TypeVar("T")


@educe("Copy(bound)", "Clone(bound)")
@dataclass
class Wrapper(Generic[T]):
    f1: T


impl = Wrapper.educe_impls[Trait.CLONE]
assert impl.copies and impl.where_predicates == ("T: Copy",)
```

`educe(*items)` is used with trait items as strings, or bare as `@educe`,
in which case only the class's `educe_attrs` are read. It installs `clone`
and `clone_from` on the class (and on every variant class of an enum) and
stores the implementations in `cls.educe_impls`, a dict from
`educe_derive.traits.Trait` to `educe_derive.clone_enum.CloneImpl` or
`educe_derive.copying.CopyImpl`.

### Clone

- By default each field is cloned with `copy.deepcopy` and a new instance is
  made without calling `__init__`.
- `Clone(method = "path")` / `Clone(method("path"))` clones a field by
  calling the function at `path`. `Clone(trait = "A")` / `Clone(trait("A"))`
  calls `A::clone`; `trait` and `method` together call `A::method`. Paths
  are looked up first in the `scope` mapping passed to `clone(scope=...)`
  and otherwise among the builtins; both `::` and `.` separate parts.
- `clone_from(source, scope=None)` copies the fields of `source` into the
  value and returns it. For enums, when the value and `source` are different
  variants, a variant with named fields is returned unchanged and any other
  variant returns a new clone of `source` — use the returned value.
- A union is cloned with `copy.copy`, and its fields may not carry clone
  methods.

### Copy

When `Copy` is derived too and no field uses a custom clone method,
`clone` is `copy.copy` of the value and `clone_from` copies fields by
`copy.deepcopy`.

### Bounds

`Clone(bound)` gives every generic type parameter the bound `Clone`
(or `Copy` when cloning copies); `Copy(bound)` gives them `Copy`.
`bound = "T: core::clone::Clone"` or `bound("...")` states the where
predicates explicitly. The predicates are recorded in `where_predicates`.

## Lower-level functions

| Name | Purpose |
| --- | --- |
| `educe_derive.derive.collect_trait_metas(attributes)` | Map each trait in `educe(...)` attributes to its item, in trait order |
| `educe_derive.clone_struct.derive_clone(shape, traits, meta)` | Clone for a struct, enum or union shape |
| `educe_derive.clone_struct.derive_clone_struct` / `derive_clone_union`, `educe_derive.clone_enum.derive_clone_enum` | Clone for one kind |
| `educe_derive.copying.derive_copy(shape, traits, meta)` | Copy implementation |
| `educe_derive.clone_attrs`, `educe_derive.copy_attrs` | Reading of Clone and Copy attribute items |
| `educe_derive.meta.parse_meta(text)` | Parse items such as `Clone(bound = "T: Clone")` into `MetaPath`, `MetaList` or `MetaNameValue` |
| `educe_derive.meta.parse_path`, `parse_where_predicates`, `predicates_for_generics` | Paths and where predicates |
| `educe_derive.traits.Trait.from_str(s)` | Look a trait up by name |

## Errors

Every misuse raises `educe_derive.errors.EduceError`, for example:

- a trait listed twice: ``The trait `Clone` is repeatedly used.``
- a trait used on a field but not derived for the type: ``The `Clone` trait is not used.``
- an unknown trait name: ``Unsupported trait `Foo`. Available traits are [...]``
- an unknown parameter: ``Unknown parameter `x` used in the `Clone` attribute.``
- a parameter given twice: ``Try to reset the `method` parameter.``
- an empty parameter: ``You can't set the `bound` parameter to empty.``
- a literal directly inside `educe(...)`:
  ``You are using an incorrect format of the `educe` attribute. It needs to be formed into `#[educe(Trait1, Trait2, ..., TraitN)]`.``
- nothing to derive: ``You are using `Educe` in the `derive` attribute, but it has not been set up yet.``

## What it does not do

Only `Clone` and `Copy` can be derived. The names `Debug`, `PartialEq`,
`Eq`, `PartialOrd`, `Ord`, `Hash`, `Default`, `Deref` and `DerefMut` are
recognised by `Trait`, but asking `educe` for any of them raises
``Unsupported trait `...`. Available traits are [Clone, Copy]``. No
formatting, comparison, hashing, default values or dereferencing is
generated. There is no command-line tool.