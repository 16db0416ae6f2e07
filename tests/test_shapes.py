from typing import Annotated, ClassVar, Generic, TypeVar

import pytest

from educe_derive.errors import EduceError
from educe_derive.shapes import Field, Kind, TypeShape

T = TypeVar("T")


def test_named_struct():
    class Struct:
        f1: int
        f2: str

    shape = TypeShape.from_class(Struct)
    assert shape.kind is Kind.STRUCT
    assert shape.name == "Struct"
    assert [f.name for f in shape.fields] == ["f1", "f2"]
    assert [f.index for f in shape.fields] == [0, 1]
    assert shape.tuple_like is False
    assert shape.is_unit is False


def test_tuple_struct():
    class Tuple:
        _0: int
        _1: int

    shape = TypeShape.from_class(Tuple)
    assert shape.tuple_like is True
    assert shape.fields[1] == Field("_1", 1, int, ())


def test_unit_struct():
    class Unit:
        pass

    shape = TypeShape.from_class(Unit)
    assert shape.kind is Kind.STRUCT
    assert shape.is_unit is True
    assert shape.fields == ()


def test_field_attributes_from_annotated():
    class Struct:
        f1: Annotated[int, 'Clone(method = "clone")', 5]
        f2: int

    shape = TypeShape.from_class(Struct)
    assert shape.fields[0].attributes == ('Clone(method = "clone")',)
    assert shape.fields[0].annotation is int
    assert shape.fields[1].attributes == ()


def test_classvar_is_not_a_field():
    class Struct:
        limit: ClassVar[int] = 3
        f1: int

    assert [f.name for f in TypeShape.from_class(Struct).fields] == ["f1"]


def test_enum_variants():
    class Enum:
        class Unit:
            pass

        class Struct:
            f1: int

        class Tuple:
            educe_attrs = "Clone"
            _0: int

    shape = TypeShape.from_class(Enum)
    assert shape.kind is Kind.ENUM
    assert [v.name for v in shape.variants] == ["Unit", "Struct", "Tuple"]
    assert shape.variants[0].is_unit is True
    assert shape.variants[1].tuple_like is False
    assert shape.variants[2].tuple_like is True
    assert shape.variants[2].attributes == ("Clone",)
    assert shape.fields == ()


def test_union_kind():
    class Union:
        educe_kind = "union"
        f1: int
        f2: float

    shape = TypeShape.from_class(Union)
    assert shape.kind is Kind.UNION
    assert [f.name for f in shape.fields] == ["f1", "f2"]


def test_explicit_kind_member():
    class Union:
        educe_kind = Kind.UNION
        f1: int

    assert TypeShape.from_class(Union).kind is Kind.UNION


def test_unknown_kind():
    class Odd:
        educe_kind = "tuple"

    with pytest.raises(EduceError, match="Unknown kind"):
        TypeShape.from_class(Odd)


def test_generics():
    class Holder(Generic[T]):
        f1: T

    assert TypeShape.from_class(Holder).generics == ("T",)


def test_type_attributes_must_be_strings():
    class Bad:
        educe_attrs = ("Clone", 3)

    with pytest.raises(EduceError):
        TypeShape.from_class(Bad)