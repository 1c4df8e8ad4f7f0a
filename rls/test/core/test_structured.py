from __future__ import annotations

from rls.core.structured import as_obj_list, as_str_dict, get_bool, get_int, get_str, get_table


def test_as_str_dict_rejects_non_string_keys() -> None:
    assert as_str_dict({"a": 1}) == {"a": 1}
    assert as_str_dict({1: "a"}) is None
    assert as_str_dict(["a"]) is None


def test_as_obj_list() -> None:
    assert as_obj_list([1, "a"]) == [1, "a"]
    assert as_obj_list({"a": 1}) is None


def test_get_str_strips_and_drops_empty() -> None:
    table: dict[str, object] = {"name": "  v1.2.0 ", "blank": "   ", "num": 3}
    assert get_str(table, "name") == "v1.2.0"
    assert get_str(table, "blank") is None
    assert get_str(table, "num") is None
    assert get_str(table, "missing") is None


def test_get_int_rejects_bool() -> None:
    table: dict[str, object] = {"id": 42, "flag": True, "text": "42"}
    assert get_int(table, "id") == 42
    assert get_int(table, "flag") is None
    assert get_int(table, "text") is None


def test_get_bool_and_table() -> None:
    table: dict[str, object] = {"draft": False, "commit": {"message": "x"}, "n": 0}
    assert get_bool(table, "draft") is False
    assert get_bool(table, "n") is None
    assert get_table(table, "commit") == {"message": "x"}
    assert get_table(table, "draft") is None
