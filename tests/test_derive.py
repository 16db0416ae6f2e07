import re
from dataclasses import dataclass
from typing import Annotated, Generic, TypeVar

import pytest

from educe_derive.derive import collect_trait_metas, educe
from educe_derive.errors import EduceError
from educe_derive.meta import MetaList, MetaPath
from educe_derive.traits import Trait

T = TypeVar("T")


def test_collect_orders_by_trait():
    metas = collect_trait_metas(["educe(Copy, Clone(bound))", "other(x)"])
    assert list(metas) == [Trait.CLONE, Trait.COPY]
    assert metas[Trait.COPY] == MetaPath("Copy")
    assert metas[Trait.CLONE] == MetaList("Clone", (MetaPath("bound"),))


def test_collect_accepts_attribute_brackets():
    metas = collect_trait_metas(["#[educe(Clone)]"])
    assert metas == {Trait.CLONE: MetaPath("Clone")}


def test_collect_rejects_repeated_trait():
    with pytest.raises(EduceError, match=re.escape("The trait `Clone` is repeatedly used.")):
        collect_trait_metas(["educe(Clone)", "educe(Clone(bound))"])


@pytest.mark.parametrize("attribute", ['educe = "Clone"', 'educe("Clone")', "educe"])
def test_collect_rejects_bad_format(attribute):
    with pytest.raises(EduceError, match=re.escape("incorrect format of the `educe` attribute")):
        collect_trait_metas([attribute])


def test_collect_rejects_unknown_trait():
    with pytest.raises(EduceError, match=re.escape("Unsupported trait `Foo`")):
        collect_trait_metas(["educe(Foo)"])


def test_clone_struct_and_tuple():
    @dataclass
    class Struct:
        f1: int

    @dataclass
    class Tuple:
        _0: int

    Struct = educe("Clone")(Struct)
    Tuple = educe("Clone")(Tuple)

    assert Struct(1).clone().f1 == 1
    assert Tuple(1).clone()._0 == 1
    assert Struct.educe_impls[Trait.CLONE].copies is False


def test_copy_and_clone():
    @dataclass
    class Struct:
        f1: list

    Struct = educe("Copy", "Clone")(Struct)

    original = Struct([1])
    cloned = original.clone()
    assert cloned.f1 is original.f1
    assert set(Struct.educe_impls) == {Trait.CLONE, Trait.COPY}


def test_bound_predicates():
    @dataclass
    class Struct(Generic[T]):
        f1: T

    Struct = educe("Copy(bound)", "Clone(bound)")(Struct)

    assert Struct.educe_impls[Trait.CLONE].where_predicates == ("T: Copy",)
    assert Struct.educe_impls[Trait.COPY].where_predicates == ("T: Copy",)
    assert Struct(1).clone().f1 == 1


def test_custom_method_with_scope():
    @dataclass
    class Struct:
        f1: Annotated[int, 'educe(Clone(method = "clone"))']

    Struct = educe("Clone")(Struct)

    assert Struct(1).clone({"clone": lambda v: v + 100}).f1 == 101


def test_clone_from_method():
    @dataclass
    class Struct:
        f1: int

    Struct = educe("Clone")(Struct)

    target = Struct(1)
    assert target.clone_from(Struct(2)) is target
    assert target.f1 == 2


def test_enum_variants_get_clone():
    class Enum:
        @dataclass
        class Unit:
            pass

        @dataclass
        class Struct:
            f1: int

    Enum = educe("Clone")(Enum)

    assert Enum.Struct(1).clone().f1 == 1
    assert Enum.Unit().clone() == Enum.Unit()


def test_union():
    @dataclass
    class Union:
        educe_kind = "union"
        f1: int

    Union = educe("Copy", "Clone")(Union)

    assert Union(1).clone().f1 == 1


def test_bare_decorator_reads_class_attributes():
    @dataclass
    class Struct:
        educe_attrs = "educe(Clone)"
        f1: int

    Struct = educe(Struct)

    assert Struct(1).clone().f1 == 1


def test_no_traits_is_an_error():
    @dataclass
    class Struct:
        f1: int

    with pytest.raises(
        EduceError,
        match=re.escape(
            "You are using `Educe` in the `derive` attribute, but it has not been set up yet."
        ),
    ):
        educe(Struct)


def test_unsupported_trait():
    @dataclass
    class Struct:
        f1: int

    with pytest.raises(EduceError, match=re.escape("Unsupported trait `Debug`")):
        educe("Debug")(Struct)


def test_field_trait_not_derived():
    @dataclass
    class Struct:
        f1: Annotated[int, "educe(Copy)"]

    with pytest.raises(EduceError, match=re.escape("The `Copy` trait is not used.")):
        educe("Clone")(Struct)


def test_non_string_items_rejected():
    with pytest.raises(TypeError, match="strings"):
        educe("Clone", 3)