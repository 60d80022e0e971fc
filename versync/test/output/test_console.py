"""Tests for versync.output.console module."""

from __future__ import annotations

import pytest

from versync.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("Cargo.toml", Style.DIM)
        assert console.outputs[0].message == "Cargo.toml"
        assert console.outputs[0].style == Style.DIM

    def test_labelled_messages(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("bad")
        console.warning("careful")
        console.info("fyi")
        assert console.messages == ["OK done", "error: bad", "warning: careful", "info: fyi"]
        assert console.has_error()
        assert console.has_warning()

    def test_text_and_find(self) -> None:
        console = MockConsole()
        console.print("a")
        console.newline()
        console.print("b")
        assert console.text == "a\n\nb"
        assert len(console.find("b")) == 1

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.header("x")


class TestRichConsole:
    def test_print_does_not_interpret_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().print("Cargo.toml:5: [workspace.package]")
        assert "[workspace.package]" in capsys.readouterr().out

    def test_error_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().error("mismatch [1.0.0]")
        captured = capsys.readouterr()
        assert "error: mismatch [1.0.0]" in captured.err
        assert captured.out == ""


def test_style_str() -> None:
    assert str(Style.WARNING) == "warning"
