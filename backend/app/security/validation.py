# backend/app/security/validation.py
"""
Business-level credential rules.

Runs after request binding has already guaranteed presence and length.
Bangladeshi mobile numbers are 11 digits starting with 01 and an operator
digit 3-9; they may arrive with the country code (88 / +88) and with
spaces or dashes.
"""
import re

CANONICAL_PREFIX = "+88"
MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100

_MSISDN_RE = re.compile(r"(?:\+?88)?(01[3-9][0-9]{8})")
_NAME_RE = re.compile(r"[a-zA-Z .'-]+")


def _clean_msisdn(msisdn: str) -> str:
    return msisdn.replace(" ", "").replace("-", "")


def validate_msisdn(msisdn: str) -> bool:
    """
    True for a valid Bangladeshi mobile number.

    Accepted: 01712345678, 8801712345678, +8801712345678, "017-1234 5678".
    """
    if not msisdn:
        return False
    return _MSISDN_RE.fullmatch(_clean_msisdn(msisdn)) is not None


def normalize_msisdn(msisdn: str) -> str:
    """
    Canonical storage form: ``+88`` followed by the 11-digit local number.

    Input that is not a valid number is returned cleaned but otherwise
    untouched; callers validate first.
    """
    cleaned = _clean_msisdn(msisdn)
    match = _MSISDN_RE.fullmatch(cleaned)
    if not match:
        return cleaned
    return CANONICAL_PREFIX + match.group(1)


def validate_password(password: str) -> bool:
    # Length only; spaces count
    return password is not None and len(password) >= MIN_PASSWORD_LENGTH


def validate_name(name: str) -> bool:
    """2-100 characters after trimming; letters, spaces and . ' - only."""
    if name is None:
        return False
    name = name.strip()
    if len(name) < MIN_NAME_LENGTH or len(name) > MAX_NAME_LENGTH:
        return False
    return _NAME_RE.fullmatch(name) is not None

