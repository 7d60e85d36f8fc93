"""String and format helpers shared by request handling and scripts."""

import re
import secrets
import string
import time
from datetime import date, datetime

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[\d\s\-()]+$")
PHONE_MIN_DIGITS = 7
PASSPORT_MIN_LEN = 6
PASSPORT_MAX_LEN = 12

_BASE36 = string.digits + string.ascii_lowercase


def validate_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def validate_phone(phone: str) -> bool:
    """Digits with optional leading '+', spaces, dashes and parentheses; at least 7 digits."""
    if not PHONE_RE.match(phone):
        return False
    return sum(ch.isdigit() for ch in phone) >= PHONE_MIN_DIGITS


def validate_passport_number(passport: str) -> bool:
    return PASSPORT_MIN_LEN <= len(passport) <= PASSPORT_MAX_LEN


def sanitize_string(value: str) -> str:
    """Trim and drop angle brackets so the value cannot open an HTML tag."""
    return value.strip().replace("<", "").replace(">", "")


def format_currency(amount: float, currency: str = "AED") -> str:
    """e.g. format_currency(1234.5) -> 'AED 1,234.50'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency.upper()} {abs(amount):,.2f}"


def format_date(value: date | datetime) -> str:
    """Long day-month-year form, e.g. '18 October 2026'."""
    return f"{value.day} {value.strftime('%B')} {value.year}"


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_reference_number(prefix: str = "") -> str:
    """Upper-case reference: prefix + base36 millisecond timestamp + 6 random chars."""
    timestamp = _to_base36(int(time.time() * 1000))
    random_part = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"{prefix}{timestamp}{random_part}".upper()
