from __future__ import annotations

import pytest

from recordflow.config import PipelineConfiguration, parse_bool, parse_config_blob


def test_blob_skips_lines_without_colon_and_splits_on_first_colon() -> None:
    table = parse_config_blob("TraceMessageStack:true\nbadline\nfoo:bar:baz")

    assert table == {"TraceMessageStack": "true", "foo": "bar:baz"}


def test_blob_handles_blank_lines_and_windows_newlines() -> None:
    assert parse_config_blob("a:1\r\n\r\n  \nb:2") == {"a": "1", "b": "2"}


def test_blob_only_splits_on_newlines() -> None:
    text = "title:Q1\x0cReport draft\nsep:a\x1eb\x85c"

    assert parse_config_blob(text) == {"title": "Q1\x0cReport draft", "sep": "a\x1eb\x85c"}


def test_blob_keeps_keys_and_values_verbatim() -> None:
    assert parse_config_blob(" key : value ") == {" key ": " value "}


def test_duplicate_key_stops_parsing(caplog: pytest.LogCaptureFixture) -> None:
    table = parse_config_blob("a:1\nb:2\na:3\nc:4")

    assert table == {"a": "1", "b": "2"}
    assert "Duplicate configuration key" in caplog.text


@pytest.mark.parametrize("text", [None, "", "\n\n"])
def test_empty_blob(text: str | None) -> None:
    assert parse_config_blob(text) == {}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("true", True),
        (" True ", True),
        ("FALSE", False),
        ("yes", None),
        ("1", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_bool(raw: str | None, expected: bool | None) -> None:  # noqa: FBT001
    assert parse_bool(raw) is expected


def test_trace_message_stack_flag() -> None:
    assert PipelineConfiguration.parse("TraceMessageStack:true").trace_message_stack is True
    assert PipelineConfiguration.parse("TraceMessageStack:maybe").trace_message_stack is False
    assert PipelineConfiguration.parse(None).trace_message_stack is False


def test_trace_message_stack_only_reads_unsecure_blob() -> None:
    configuration = PipelineConfiguration.parse("", "TraceMessageStack:true")

    assert configuration.trace_message_stack is False
    assert configuration.secure_values == {"TraceMessageStack": "true"}


def test_preserve_fields() -> None:
    configuration = PipelineConfiguration.parse("PreserveFields:a, b,,c ")

    assert configuration.preserve_fields == frozenset({"a", "b", "c"})
    assert PipelineConfiguration.parse("").preserve_fields == frozenset()


def test_raw_blobs_are_kept() -> None:
    configuration = PipelineConfiguration.parse("a:1", None)

    assert configuration.unsecure == "a:1"
    assert configuration.secure == ""
