"""Tests for shape classification, compatibility and zero values."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, NewType, Optional

import pytest
from pydantic import BaseModel

from fieldmap import ShapeKind, classify
from fieldmap.core.shape import (
    describe_type,
    detach,
    is_assignable,
    is_compatible,
    is_convertible,
    is_mutable_primitive,
    is_record,
    is_record_type,
    is_zero,
    new_record,
    zero_value,
)

UserId = NewType("UserId", int)
type Tags = list[str]


@dataclass
class Address:
    city: str = ""
    zip_code: str = ""


@dataclass
class Person:
    name: str
    address: Address
    nicknames: list[str]
    scores: dict[str, int] = field(default_factory=dict)
    level: int = 1


class Profile(BaseModel):
    handle: str
    followers: int = 0


class Color(Enum):
    RED = 0
    BLUE = 1


@pytest.mark.parametrize(
    "declared,kind,origin",
    [
        (int, ShapeKind.PRIMITIVE, int),
        (str, ShapeKind.PRIMITIVE, str),
        (Color, ShapeKind.PRIMITIVE, Color),
        (set[int], ShapeKind.PRIMITIVE, set),
        (Address, ShapeKind.RECORD, Address),
        (Profile, ShapeKind.RECORD, Profile),
        (list[int], ShapeKind.SEQUENCE, list),
        (list, ShapeKind.SEQUENCE, list),
        (Sequence[str], ShapeKind.SEQUENCE, list),
        (tuple[int, ...], ShapeKind.SEQUENCE, tuple),
        (dict[str, int], ShapeKind.MAP, dict),
        (Mapping[str, Address], ShapeKind.MAP, dict),
        (int | None, ShapeKind.OPTIONAL, None),
        (Optional[Address], ShapeKind.OPTIONAL, None),
        (Any, ShapeKind.OPAQUE, None),
        (int | str, ShapeKind.OPAQUE, None),
        (tuple[int, str], ShapeKind.OPAQUE, None),
        ("NotResolved", ShapeKind.OPAQUE, None),
    ],
)
def test_classify(declared, kind, origin) -> None:
    shape = classify(declared)
    assert shape.kind is kind
    assert shape.origin is origin
    assert shape.declared == declared


def test_classify_exposes_type_arguments() -> None:
    assert classify(list[Address]).element is Address
    assert classify(dict[str, float]).key is str
    assert classify(dict[str, float]).value is float
    assert classify(Address | None).inner is Address
    assert classify(list).element is Any


def test_classify_unwraps_annotated_newtype_and_alias() -> None:
    assert classify(Annotated[int, "meta"]).kind is ShapeKind.PRIMITIVE
    assert classify(Annotated[int, "meta"]).origin is int
    assert classify(UserId).origin is int
    shape = classify(Tags)
    assert shape.kind is ShapeKind.SEQUENCE
    assert shape.element is str


def test_composite_flag() -> None:
    assert classify(list[int]).is_composite
    assert classify(Address).is_composite
    assert classify(int | None).is_composite
    assert not classify(int).is_composite
    assert not classify(Any).is_composite


def test_record_detection() -> None:
    assert is_record_type(Address)
    assert is_record_type(Profile)
    assert not is_record_type(BaseModel)
    assert not is_record_type(int)
    assert not is_record_type(list[int])
    assert not is_record_type(Address(city="x"))
    assert is_record(Address())
    assert is_record(Profile(handle="x"))
    assert not is_record(Address)
    assert not is_record({"city": "x"})


@pytest.mark.parametrize(
    "src,dst,expected",
    [
        (int, int, True),
        (bool, int, False),
        (bool, float, False),
        (bool, bool, True),
        (int, float, False),
        (str, int, False),
        (Address, Address, True),
        (list[int], list[int], True),
        (list[int], list[float], False),
        (int, Any, True),
        (Any, int, False),
    ],
)
def test_is_assignable(src, dst, expected) -> None:
    assert is_assignable(classify(src), classify(dst)) is expected


@pytest.mark.parametrize(
    "src,dst,expected",
    [
        (int, float, True),
        (float, int, True),
        (Decimal, float, True),
        (bool, int, False),
        (bool, float, False),
        (int, bool, False),
        (str, int, False),
        (int, str, False),
        (int, Color, False),
        (bytes, bytearray, True),
        (list[int], list[float], False),
    ],
)
def test_is_convertible(src, dst, expected) -> None:
    assert is_convertible(classify(src), classify(dst)) is expected


@pytest.mark.parametrize(
    "src,dst,expected",
    [
        (int, float, True),
        (str, int, False),
        (Address, Person, True),
        (list[str], list[int], True),
        (dict[str, int], dict[int, int], True),
        (int | None, int, True),
        (int, float | None, True),
        (str | None, int | None, False),
        (list[int], dict[str, int], False),
        (Address, int, False),
    ],
)
def test_is_compatible(src, dst, expected) -> None:
    assert is_compatible(classify(src), classify(dst)) is expected


@pytest.mark.parametrize(
    "value",
    [None, 0, 0.0, False, "", b"", Decimal(0), Address()],
)
def test_zero_values(value) -> None:
    assert is_zero(value)


@pytest.mark.parametrize(
    "value",
    [1, -0.5, True, "x", b"\x00", [], {}, [0], Address(city="Oslo"), Color.RED],
)
def test_non_zero_values(value) -> None:
    """Empty (non-nil) containers are not zero.

    Why: Patch mode must still be able to clear a list by sending [].
    """
    assert not is_zero(value)


def test_is_assignable_rejects_bool_into_numbers() -> None:
    """CRITICAL: bool never flows into a numeric field.

    Why: True would otherwise land in an int field as 1, which a typed
    destination does not accept as a plain copy.
    """
    assert not is_assignable(classify(bool), classify(int))
    assert not is_convertible(classify(bool), classify(int))
    assert not is_compatible(classify(bool), classify(int))


@pytest.mark.parametrize(
    "value,declared,expected",
    [
        (None, Address | None, True),
        (Address(), Address | None, False),
        (0, int | None, False),
        ("", Optional[str], False),
        ([], list[int], False),
        (None, list[int], True),
        (0, Any, False),
        (Address(), Address, True),
        (0, int, True),
    ],
)
def test_is_zero_under_declared_type(value, declared, expected) -> None:
    """CRITICAL: Under an optional declaration only None is zero.

    Why: A present-but-blank value behind an optional field is a deliberate
    value, so skip-zero mode must still copy it.
    """
    assert is_zero(value, declared) is expected


@dataclass
class Ring:
    label: str = ""
    peer: "Ring | None" = None


@dataclass
class Chain:
    label: str = ""
    link: "Chain" = None  # type: ignore[assignment]


def test_is_zero_terminates_on_cyclic_records() -> None:
    optional_cycle = Ring()
    optional_cycle.peer = optional_cycle
    assert not is_zero(optional_cycle)

    plain_cycle = Chain()
    plain_cycle.link = plain_cycle
    assert not is_zero(plain_cycle)


def test_detach_copies_mutable_primitives() -> None:
    tags = {"a"}
    raw = bytearray(b"ab")
    assert detach(tags) == tags and detach(tags) is not tags
    assert detach(raw) == raw and detach(raw) is not raw
    text = "shared"
    assert detach(text) is text
    assert is_mutable_primitive(classify(set[int]))
    assert not is_mutable_primitive(classify(frozenset[int]))
    assert not is_mutable_primitive(classify(int))


def test_zero_value_of_declared_types() -> None:
    assert zero_value(int) == 0
    assert zero_value(str) == ""
    assert zero_value(bytes) == b""
    assert zero_value(list[int]) is None
    assert zero_value(dict[str, int]) is None
    assert zero_value(int | None) is None
    assert zero_value(Color) is None
    assert zero_value(Any) is None
    assert zero_value(Address) == Address()


def test_new_record_fills_defaults_and_zero_values() -> None:
    person = new_record(Person)
    assert person.name == ""
    assert person.address == Address()
    assert person.nicknames is None
    assert person.scores == {}
    assert person.level == 1


def test_new_record_pydantic() -> None:
    profile = new_record(Profile)
    assert isinstance(profile, Profile)
    assert profile.handle == ""
    assert profile.followers == 0


def test_unresolvable_annotation_warns() -> None:
    @dataclass
    class Broken:
        ok: int = 0
        missing: "DoesNotExist" = None  # noqa: F821

    from fieldmap.core.shape import resolve_hints

    with pytest.warns(RuntimeWarning, match="Could not resolve type hints"):
        hints = resolve_hints(Broken)
    assert classify(hints["missing"]).kind is ShapeKind.OPAQUE


def test_describe_type() -> None:
    assert describe_type(int) == "int"
    assert describe_type(list[int]) == "list[int]"
    assert describe_type(Any) == "Any"
    assert describe_type(Address).endswith("Address")
    assert describe_type(UserId) == "UserId"
