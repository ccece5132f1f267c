"""Tests for map mapping."""

from dataclasses import dataclass, field

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fieldmap import MappingError, MappingErrorCode, map_into


@dataclass
class Database:
    host: str = ""
    port: int = 0


@dataclass
class DatabaseDTO:
    host: str = ""
    port: int = 0


@dataclass
class BadDatabase:
    host: int = 0


@dataclass
class Settings:
    config: dict[str, Database] = field(default_factory=dict)


@dataclass
class SettingsDTO:
    config: dict[str, DatabaseDTO] = field(default_factory=dict)


@dataclass
class BadSettings:
    config: dict[str, BadDatabase] = field(default_factory=dict)


@dataclass
class StrInt:
    data: dict[str, int] | None = None


@dataclass
class IntInt:
    data: dict[int, int] | None = None


@dataclass
class StrFloat:
    data: dict[str, float] | None = None


@dataclass
class StrStr:
    data: dict[str, str] | None = None


@dataclass
class FloatInt:
    data: dict[float, int] | None = None


@dataclass
class Groups:
    members: dict[str, list[str]] = field(default_factory=dict)


def test_primitive_map_copied() -> None:
    src = StrInt(data={"a": 1, "b": 2})
    dst = map_into(StrInt(), src)

    assert dst.data == {"a": 1, "b": 2}
    assert dst.data is not src.data


def test_nil_map_stays_nil() -> None:
    dst = map_into(StrInt(data={"x": 1}), StrInt(data=None))
    assert dst.data is None


def test_empty_map_stays_empty() -> None:
    dst = map_into(StrInt(), StrInt(data={}))
    assert dst.data == {}
    assert dst.data is not None


def test_incompatible_keys() -> None:
    """No entries are copied when key types cannot be reconciled."""
    dst = IntInt(data={1: 1})
    with pytest.raises(MappingError) as exc_info:
        map_into(dst, StrInt(data={"a": 1}))

    err = exc_info.value
    assert err.code is MappingErrorCode.INCOMPATIBLE_KEYS
    assert err.field_path == "data"
    assert err.reason == "map key types are incompatible: str -> int"
    assert dst.data == {1: 1}


def test_incompatible_values() -> None:
    with pytest.raises(MappingError) as exc_info:
        map_into(StrInt(), StrStr(data={"a": "x"}))

    assert exc_info.value.code is MappingErrorCode.INCOMPATIBLE_VALUES
    assert exc_info.value.field_path == "data"


def test_value_conversion() -> None:
    dst = map_into(StrFloat(), StrInt(data={"a": 1}))
    assert dst.data == {"a": 1.0}
    assert isinstance(dst.data["a"], float)


def test_key_conversion() -> None:
    dst = map_into(FloatInt(), IntInt(data={1: 10, 2: 20}))
    assert dst.data == {1.0: 10, 2.0: 20}
    assert all(isinstance(k, float) for k in dst.data)


def test_record_values() -> None:
    src = SettingsDTO(config={"database": DatabaseDTO("db.local", 5432)})
    dst = map_into(Settings(), src)

    assert dst.config == {"database": Database("db.local", 5432)}
    assert type(dst.config["database"]) is Database


def test_value_error_path() -> None:
    src = Settings(config={"database": Database("db.local", 5432)})
    with pytest.raises(MappingError) as exc_info:
        map_into(BadSettings(), src)

    assert exc_info.value.code is MappingErrorCode.INCOMPATIBLE_TYPES
    assert exc_info.value.field_path == "config[database].host"


def test_map_of_lists_independent() -> None:
    src = Groups(members={"admins": ["ann"]})
    dst = map_into(Groups(), src)
    src.members["admins"].append("bob")

    assert dst.members == {"admins": ["ann"]}


def test_map_of_sets_independent() -> None:
    @dataclass
    class Permissions:
        grants: dict[str, set[str]] = field(default_factory=dict)

    src = Permissions(grants={"ann": {"read"}})
    dst = map_into(Permissions(), src)
    src.grants["ann"].add("write")

    assert dst.grants == {"ann": {"read"}}


@given(st.dictionaries(st.text(max_size=4), st.integers(), max_size=5))
def test_entries_preserved(data) -> None:
    src = StrInt(data=dict(data))
    dst = map_into(StrInt(), src)
    src.data["__new__"] = 1

    assert dst.data == data
    assert set(dst.data) == set(data)
