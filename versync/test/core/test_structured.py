"""Tests for versync.core.structured module."""

from versync.core.structured import as_str_dict, get_list, get_str, get_str_list


def test_as_str_dict() -> None:
    assert as_str_dict({"a": 1}) == {"a": 1}
    assert as_str_dict({1: "a"}) is None
    assert as_str_dict(["a"]) is None


def test_get_str_keeps_spaces() -> None:
    assert get_str({"template": "    version={version}"}, "template") == "    version={version}"
    assert get_str({"template": ""}, "template") is None
    assert get_str({"template": 3}, "template") is None
    assert get_str({}, "template") is None


def test_get_list() -> None:
    assert get_list({"site": [{"path": "a"}]}, "site") == [{"path": "a"}]
    assert get_list({"site": "a"}, "site") is None


def test_get_str_list() -> None:
    assert get_str_list({"exclude": ["target", "dist"]}, "exclude") == ["target", "dist"]
    assert get_str_list({"exclude": ["target", 1]}, "exclude") is None
    assert get_str_list({}, "exclude") is None
