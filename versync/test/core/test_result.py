"""Tests for versync.core.result module."""

import pytest

from versync.core.result import Err, Ok, Result


def test_repr() -> None:
    assert repr(Ok("1.0.0")) == "Ok('1.0.0')"
    assert repr(Err("boom")) == "Err('boom')"


def test_equality() -> None:
    assert Ok("1.0.0") == Ok("1.0.0")
    assert Ok("1.0.0") != Err("1.0.0")


def test_pattern_matching() -> None:
    result: Result[str, str] = Ok("1.2.3")
    match result:
        case Ok(value):
            assert value == "1.2.3"
        case Err(_):
            pytest.fail("expected Ok")
