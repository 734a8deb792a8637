"""Phone number normalization and validation.

Numbers are kept in international form: ``+`` followed by the country
calling code and the subscriber digits, e.g. ``+998901234567``.
"""

import re

DEFAULT_COUNTRY_CODE = "998"
SUBSCRIBER_DIGITS = 9


def normalize_phone(value: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """Rewrite free-form input into ``+<country code><digits>``.

    Runs on every edit of a phone field, so partial input is expected:
    ``"90"`` becomes ``"+99890"``. Input without digits normalizes to ``""``.
    """
    digits = re.sub(r"\D", "", value)
    if not digits:
        return ""
    if digits.startswith(country_code):
        return f"+{digits}"
    return f"+{country_code}{digits}"


def is_valid_phone(value: str, country_code: str = DEFAULT_COUNTRY_CODE) -> bool:
    """A complete number carries the ``+<code>`` prefix and all subscriber digits."""
    number = re.sub(r"\s", "", value)
    prefix = f"+{country_code}"
    return (
        number.startswith(prefix)
        and number[1:].isdigit()
        and len(number) >= len(prefix) + SUBSCRIBER_DIGITS
    )
