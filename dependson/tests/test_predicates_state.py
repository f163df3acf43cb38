"""Tests for state flag and pattern predicates."""

from __future__ import annotations

import re

from dependson.core.domain.models import FieldState
from dependson.core.operators.predicates import (
    checked,
    email,
    enabled,
    match,
    not_match,
    url,
)


def test_enabled_matches_disabled_flag():
    assert enabled(FieldState(value="", disabled=False), True) is True
    assert enabled(FieldState(value="", disabled=True), True) is False
    assert enabled(FieldState(value="", disabled=True), False) is True
    assert enabled(FieldState(value="", disabled=False), False) is False


def test_checked_applies_to_checkboxes_only():
    box_on = FieldState(value="on", checked=True, field_type="checkbox")
    box_off = FieldState(value="on", checked=False, field_type="checkbox")
    assert checked(box_on, True) is True
    assert checked(box_off, True) is False
    assert checked(box_off, False) is True
    assert checked(box_on, False) is False
    radio = FieldState(value=None, checked=False, field_type="radio")
    assert checked(radio, True) is True
    assert checked(FieldState(value="x"), True) is True


def test_match_requires_every_item():
    pattern = re.compile(r"^\d+$")
    assert match(FieldState(value="123"), pattern) is True
    assert match(FieldState(value=("1", "22")), pattern) is True
    assert match(FieldState(value=("1", "b")), pattern) is False
    assert match(FieldState(value=()), pattern) is True


def test_match_accepts_pattern_text():
    assert match(FieldState(value="abc"), "^a") is True
    assert match(FieldState(value="abc"), "[") is False


def test_not_match_requires_no_item():
    pattern = re.compile("x")
    assert not_match(FieldState(value="abc"), pattern) is True
    assert not_match(FieldState(value=("a", "xb")), pattern) is False
    assert not_match(FieldState(value=None), pattern) is True


def test_email():
    assert email(FieldState(value="jane.doe@example.com"), True) is True
    assert email(FieldState(value="jane@example"), True) is False
    assert email(FieldState(value="jane@example"), False) is True
    assert email(FieldState(value="a+b@mail.museum"), True) is True


def test_email_flag_is_strict():
    assert email(FieldState(value="jane.doe@example.com"), 1) is False


def test_url():
    assert url(FieldState(value="https://example.com/path?q=1"), True) is True
    assert url(FieldState(value="www.example.org"), True) is True
    assert url(FieldState(value="example"), True) is False
    assert url(FieldState(value="example"), False) is True
