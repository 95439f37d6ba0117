"""
Entry rendering unit tests.

Covers value stringification, stack-trace formatting and the PrettyPrinter
structlog renderer.
"""

from __future__ import annotations

import traceback

import structlog

from logger_export.formatters import (
    LineCollector,
    PrettyPrinter,
    capture_stack,
    format_stack_trace,
    render_value,
)


def _raise_value_error():
    raise ValueError("boom")


class TestRenderValue:
    """render_value tests"""

    def test_string_is_unchanged(self) -> None:
        assert render_value("plain text") == "plain text"

    def test_mapping_renders_unquoted(self) -> None:
        assert render_value({"a": 1}) == "{a: 1}"
        assert render_value({"key": "value"}) == "{key: value}"

    def test_sequence_renders_with_brackets(self) -> None:
        assert render_value([1, 2, 3, 4]) == "[1, 2, 3, 4]"
        assert render_value((1, "b")) == "[1, b]"

    def test_nested_containers(self) -> None:
        assert render_value({"ids": [1, 2], "meta": {"ok": True}}) == "{ids: [1, 2], meta: {ok: True}}"

    def test_self_referencing_containers(self) -> None:
        items = [1]
        items.append(items)
        assert render_value(items) == "[1, [...]]"

        mapping = {"a": 1}
        mapping["self"] = mapping
        assert render_value(mapping) == "{a: 1, self: {...}}"

    def test_shared_child_is_not_a_cycle(self) -> None:
        child = [1, 2]
        assert render_value([child, child]) == "[[1, 2], [1, 2]]"

    def test_empty_containers(self) -> None:
        assert render_value({}) == "{}"
        assert render_value([]) == "[]"

    def test_exception_includes_type_name(self) -> None:
        assert render_value(ValueError("boom")) == "ValueError: boom"
        assert render_value(KeyError()) == "KeyError"

    def test_object_uses_str(self) -> None:
        class Point:
            def __str__(self) -> str:
                return "Point(1, 2)"

        assert render_value(Point()) == "Point(1, 2)"
        assert render_value(None) == "None"
        assert render_value(42) == "42"


class TestFormatStackTrace:
    """format_stack_trace tests"""

    def test_none_or_zero_limit_yields_nothing(self) -> None:
        assert format_stack_trace(None, 4) == []
        assert format_stack_trace(capture_stack(), 0) == []

    def test_limit_is_respected(self) -> None:
        lines = format_stack_trace(capture_stack(), 2)
        assert len(lines) == 2
        assert lines[0].startswith("#0   ")
        assert lines[1].startswith("#1   ")

    def test_innermost_frame_first(self) -> None:
        lines = format_stack_trace(capture_stack(), 1)
        assert "test_innermost_frame_first" in lines[0]

    def test_traceback_object(self) -> None:
        try:
            _raise_value_error()
        except ValueError as exc:
            lines = format_stack_trace(exc.__traceback__, 4)

        assert "_raise_value_error" in lines[0]
        assert any("test_traceback_object" in line for line in lines)

    def test_string_trace(self) -> None:
        trace = "frame one\n\n  frame two\nframe three"
        assert format_stack_trace(trace, 2) == ["#0   frame one", "#1   frame two"]

    def test_stack_summary(self) -> None:
        lines = format_stack_trace(traceback.extract_stack(), 3)
        assert len(lines) == 3
        assert "test_stack_summary" in lines[0]


class TestPrettyPrinter:
    """PrettyPrinter tests"""

    def test_message_only(self) -> None:
        printer = PrettyPrinter()
        assert printer.format("hello") == ["hello"]

    def test_multiline_message_is_split(self) -> None:
        printer = PrettyPrinter()
        assert printer.format("a\nb") == ["a", "b"]

    def test_error_follows_message(self) -> None:
        printer = PrettyPrinter()
        assert printer.format("[ERROR] failed", ValueError("boom")) == ["[ERROR] failed", "ValueError: boom"]

    def test_explicit_trace_uses_error_method_count(self) -> None:
        printer = PrettyPrinter(method_count=0, error_method_count=3)
        lines = printer.format("msg", None, traceback.extract_stack())
        assert lines[0] == "msg"
        assert len(lines) == 4

    def test_method_count_captures_current_stack(self) -> None:
        printer = PrettyPrinter(method_count=2)
        lines = printer.format("msg")
        assert len(lines) == 3
        assert all(line.startswith("#") for line in lines[1:])

    def test_renders_through_structlog(self) -> None:
        logger = structlog.wrap_logger(
            LineCollector(),
            processors=[PrettyPrinter()],
            wrapper_class=structlog.BoundLogger,
            context_class=dict,
        )
        lines = logger.error("[ERROR] oops", error=RuntimeError("bad"), stack_trace=None)
        assert lines == ["[ERROR] oops", "RuntimeError: bad"]

    def test_timestamp_prefix(self) -> None:
        printer = PrettyPrinter()
        rendered = printer(None, "debug", {"event": "hi", "timestamp": "01-02 03:04:05"})
        assert rendered == "01-02 03:04:05 hi"
