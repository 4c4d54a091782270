from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"[^0-9]")


def format_phone_number(value: object) -> str:
    """Format free-form input as ``XXX-XXXX-XXXX`` while the user types."""

    digits = _NON_DIGITS.sub("", str(value))[:11]
    if 3 < len(digits) <= 7:
        return f"{digits[:3]}-{digits[3:]}"
    if len(digits) > 7:
        return f"{digits[:3]}-{digits[3:7]}-{digits[7:11]}"
    return digits
