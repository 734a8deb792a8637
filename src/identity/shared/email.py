"""Email address rules shared by registration and checkout."""

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(address: str) -> bool:
    """Structural check only: something@something.tld, no whitespace."""
    return bool(EMAIL_PATTERN.match(address))
