from __future__ import annotations

import pytest

from capture import (
    CaptureArityError,
    CaptureConfigError,
    CaptureMode,
    CaptureSpec,
    parse_number,
)


@pytest.mark.parametrize(
    "token, mode",
    [
        ("1", CaptureMode.Y_FROM_FIRST_GROUP),
        ("-1", CaptureMode.X_FROM_FIRST_GROUP),
        ("12", CaptureMode.XY_FROM_TWO_GROUPS),
        ("21", CaptureMode.YX_FROM_TWO_GROUPS),
    ],
)
def test_capture_mode_tokens(token: str, mode: CaptureMode) -> None:
    assert CaptureMode.from_token(token) is mode
    assert mode.description


@pytest.mark.parametrize("token", ["", "2", "x", "1 ", "-12"])
def test_unknown_capture_mode_is_config_error(token: str) -> None:
    with pytest.raises(CaptureConfigError, match="capture method"):
        CaptureSpec.parse(r"(\d+)", None, token)


def test_bad_primary_regex_is_config_error() -> None:
    with pytest.raises(CaptureConfigError, match="Could not read regex"):
        CaptureSpec.parse("value: (\\d+", None, "1")


def test_bad_reset_regex_is_config_error() -> None:
    with pytest.raises(CaptureConfigError, match="Could not read reset regex"):
        CaptureSpec.parse(r"(\d+)", "[unclosed", "1")


def test_parse_number_is_lenient() -> None:
    assert parse_number("12.5") == 12.5
    assert parse_number("-3") == -3.0
    assert parse_number("1e3") == 1000.0
    assert parse_number("abc") == 0.0
    assert parse_number("") == 0.0
    assert parse_number(None) == 0.0


def test_y_from_first_group_uses_counter_as_x(make_engine) -> None:
    engine = make_engine(r"value: (\d+)", capture="1")
    assert engine.capture("value: 10", 0.0) == (0.0, 10.0)
    assert engine.capture("foo", 1.0) is None
    assert engine.capture("value: 20", 1.0) == (1.0, 20.0)


def test_x_from_first_group_uses_counter_as_y(make_engine) -> None:
    engine = make_engine(r"value: (\d+)", capture="-1")
    assert engine.capture("value: 10", 0.0) == (10.0, 0.0)
    assert engine.capture("value: 20", 1.0) == (20.0, 1.0)


def test_two_group_modes(make_engine) -> None:
    assert make_engine(r"(\d+),(\d+)", capture="12").capture("3,4", 0.0) == (3.0, 4.0)
    assert make_engine(r"(\d+),(\d+)", capture="21").capture("3,4", 0.0) == (4.0, 3.0)


def test_regex_matches_anywhere_in_line(make_engine) -> None:
    engine = make_engine(r"t=(\d+)")
    assert engine.capture("[info] t=42 ms", 7.0) == (7.0, 42.0)


def test_malformed_number_still_yields_point(make_engine) -> None:
    engine = make_engine(r"value: (\S+)")
    assert engine.capture("value: abc", 3.0) == (3.0, 0.0)


def test_two_group_mode_without_two_groups_raises(make_engine) -> None:
    engine = make_engine(r"value: (\d+)", capture="12")
    with pytest.raises(CaptureArityError):
        engine.capture("value: 10", 0.0)
    # a non-matching line is not an arity problem
    assert engine.capture("nothing here", 0.0) is None


def test_optional_group_that_did_not_match_is_zero(make_engine) -> None:
    engine = make_engine(r"(\d+)(?:,(\d+))?", capture="12")
    assert engine.capture("7", 0.0) == (7.0, 0.0)


def test_single_group_mode_without_groups_captures_zero(make_engine) -> None:
    engine = make_engine(r"tick")
    assert engine.capture("tick", 2.0) == (2.0, 0.0)


def test_is_reset(make_engine) -> None:
    engine = make_engine(r"value: (\d+)", reset_regex=r"^RESET")
    assert engine.is_reset("RESET now")
    assert not engine.is_reset("value: 1")
    # a line can both capture and reset
    both = make_engine(r"(\d+)", reset_regex=r"restart")
    assert both.capture("restart 5", 0.0) == (0.0, 5.0)
    assert both.is_reset("restart 5")


def test_is_reset_without_reset_regex(make_engine) -> None:
    assert not make_engine(r"(\d+)").is_reset("anything")


@pytest.mark.parametrize("text", ["1_000", " 5", "5 ", "\t5", "١٢"])
def test_parse_number_rejects_what_plain_numbers_do_not_contain(text: str) -> None:
    assert parse_number(text) == 0.0


def test_parse_number_special_values() -> None:
    assert parse_number("inf") == float("inf")
    assert parse_number("-infinity") == float("-inf")
    assert parse_number("NaN") != parse_number("NaN")
    assert parse_number(".5") == 0.5
    assert parse_number("+2.") == 2.0


def test_unicode_digits_captured_by_regex_become_zero(make_engine) -> None:
    engine = make_engine(r"v=(\d+)")
    assert engine.capture("v=١٢", 0.0) == (0.0, 0.0)
