"""Naming-pattern heuristics for email local parts and usernames."""

import re

CORPORATE_EMAIL_RE = re.compile(r'^[a-z]+\.[a-z]+$')
CORPORATE_USERNAME_RE = re.compile(r'(admin|dev|manager|lead|senior)')


def detect_email_pattern(local_part: str) -> str:
    lower = local_part.lower()
    if CORPORATE_EMAIL_RE.match(lower):
        return 'firstname.lastname'
    if re.match(r'^[a-z]\.[a-z]+$', lower):
        return 'f.lastname'
    if re.match(r'^\d+$', lower):
        return 'numeric'
    if re.match(r'^[a-z]+\d+$', lower):
        return 'name+number'
    return 'custom'


def is_corporate_email(local_part: str) -> bool:
    return bool(CORPORATE_EMAIL_RE.match(local_part.lower()))


def detect_username_pattern(username: str) -> str:
    lower = username.lower()
    if re.match(r'^[a-z]+\d{2,4}$', lower):
        return 'name+number'
    if re.search(r'(gamer|player|pro)', lower):
        return 'gaming'
    if re.search(r'(dev|admin|manager)', lower):
        return 'professional'
    return 'custom'


def has_corporate_indicators(username: str) -> bool:
    return bool(CORPORATE_USERNAME_RE.search(username.lower()))


def username_variations(username: str) -> list[str]:
    base = username.lower()
    return [
        f"{base}123",
        f"{base}2024",
        f"{base}_official",
        f"the{base}",
        f"{base}pro",
    ]


def increment_suffix(value: str, step: int) -> str:
    """``alice`` -> ``alice2`` for step 2; ``bob41`` -> ``bob43``."""
    match = re.match(r'^(.*?)(\d+)$', value)
    if match:
        prefix, digits = match.groups()
        return f"{prefix}{int(digits) + step}"
    return f"{value}{step}"


def perturb_target(target: str, input_type: str, step: int) -> str:
    """A nearby variant of ``target`` used for similarity analysis."""
    if input_type == 'email' and '@' in target:
        local, domain = target.rsplit('@', 1)
        return f"{increment_suffix(local, step)}@{domain}"
    if input_type == 'ip':
        parts = target.split('.')
        parts[-1] = str((int(parts[-1]) + step) % 256)
        return '.'.join(parts)
    if input_type == 'domain' and '.' in target:
        label, rest = target.split('.', 1)
        return f"{increment_suffix(label, step)}.{rest}"
    return increment_suffix(target, step)
