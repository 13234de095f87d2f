"""Target classification."""

import re

from osintkit.models.findings import InputType
from osintkit.errors import TargetValidationError

EMAIL_RE = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+')
IPV4_RE = re.compile(
    r'(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}'
    r'(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)'
)
DOMAIN_RE = re.compile(r'(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}')
USERNAME_RE = re.compile(r'[a-zA-Z0-9._-]+')

MIN_USERNAME_LENGTH = 3


def classify(text: str) -> InputType | None:
    """
    Detect what kind of target a string is.

    Checked in order: email, IPv4, domain, username. Returns None when
    nothing matches.
    """
    value = text.strip()

    if EMAIL_RE.fullmatch(value):
        return InputType.EMAIL
    if IPV4_RE.fullmatch(value):
        return InputType.IP
    if DOMAIN_RE.fullmatch(value):
        return InputType.DOMAIN
    if len(value) >= MIN_USERNAME_LENGTH and USERNAME_RE.fullmatch(value):
        return InputType.USERNAME
    return None


def validate_input(text: str, input_type: InputType | str) -> bool:
    return classify(text) == InputType(input_type)


def require_target(text: str, input_type: InputType | str | None = None) -> InputType:
    """Classify and check the target, raising TargetValidationError on mismatch."""
    detected = classify(text)
    if detected is None:
        raise TargetValidationError(text)
    if input_type is not None and detected != InputType(input_type):
        raise TargetValidationError(text, InputType(input_type).value)
    return detected
