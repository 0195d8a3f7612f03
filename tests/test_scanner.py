import json

import pytest

from tgspec.scanner import TagScanError, scan_tags, unquote


def test_plain_values_and_bare_words():
    assert scan_tags("key=value other") == {"key": "value", "other": ""}


def test_empty_input():
    assert scan_tags("") == {}


def test_backtick_value_keeps_spaces():
    assert scan_tags("desc=`hello world` x=1") == {"desc": "hello world", "x": "1"}


def test_trailing_equal_sign():
    assert scan_tags("abc=") == {"abc": ""}


def test_equal_followed_by_space():
    assert scan_tags("abc= next") == {"abc": "", "next": ""}


def test_unterminated_string_keeps_partial_tags():
    with pytest.raises(TagScanError) as info:
        scan_tags("a=1 b=`open")
    assert str(info.value) == "unterminated string"
    assert info.value.tags == {"a": "1"}


def test_escaped_backtick_value_reports_error_and_continues():
    with pytest.raises(TagScanError) as info:
        scan_tags("x=`a\\nb` y=2")
    assert info.value.tags["y"] == "2"
    assert "x" not in info.value.tags


def test_scan_error_is_value_error():
    with pytest.raises(ValueError):
        scan_tags("k=`never closed")


def test_unquote_plain():
    assert unquote('"abc"') == "abc"


@pytest.mark.parametrize(
    "text",
    ["plain", "line\nbreak", 'quote " inside', "back\\slash", "tab\there", "caf\u00e9", "\U0001F600 smile"],
)
def test_unquote_round_trips_json_strings(text):
    assert unquote(json.dumps(text)) == text


def test_unquote_lone_surrogate_becomes_replacement():
    assert unquote('"\\ud800x"') == "\ufffdx"


@pytest.mark.parametrize("bad", ["abc", '"', '"\\x"', '"a"b"', '"\\u12"', '"tail\\"', '"ctl\x01"'])
def test_unquote_rejects_invalid(bad):
    with pytest.raises(ValueError):
        unquote(bad)