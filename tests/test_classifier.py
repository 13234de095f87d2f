"""Tests for target classification."""

import string

import pytest

from osintkit.models import InputType
from osintkit.osint import TargetValidationError, classify, require_target, validate_input


@pytest.mark.parametrize(
    "text,expected",
    [
        ("user@example.com", InputType.EMAIL),
        ("  user@example.com  ", InputType.EMAIL),
        ("first.last+tag@sub.example.co.uk", InputType.EMAIL),
        ("8.8.8.8", InputType.IP),
        ("255.255.255.255", InputType.IP),
        ("example.com", InputType.DOMAIN),
        ("sub.example-site.org", InputType.DOMAIN),
        ("john_doe", InputType.USERNAME),
        ("abc", InputType.USERNAME),
        ("256.1.1.1", InputType.USERNAME),
        ("a", None),
        ("ab", None),
        ("", None),
        ("has space", None),
        ("bad@", None),
        ("@nouser.com", None),
    ],
)
def test_classify(text, expected):
    assert classify(text) == expected


def test_email_takes_precedence_over_domain():
    assert classify("admin@8.8.8.8.com") == InputType.EMAIL


def test_classify_is_total_over_ascii():
    allowed = set(InputType) | {None}
    samples = [c for c in string.printable] + [
        string.ascii_letters,
        string.digits,
        string.punctuation,
        "1.2.3",
        "1.2.3.4.5",
        "a.b",
        "x" * 300,
        "trailing.dot.",
        "-leading.com",
    ]
    for sample in samples:
        assert classify(sample) in allowed


def test_short_inputs_are_invalid():
    for text in ["a", "ab", "1", "..", "-_"]:
        assert classify(text) is None


def test_validate_input():
    assert validate_input("8.8.8.8", "ip")
    assert not validate_input("8.8.8.8", InputType.DOMAIN)


def test_require_target_rejects_mismatch():
    with pytest.raises(TargetValidationError) as exc:
        require_target("example.com", InputType.EMAIL)
    assert exc.value.expected == "email"

    with pytest.raises(TargetValidationError):
        require_target("x")

    assert require_target("example.com") == InputType.DOMAIN
