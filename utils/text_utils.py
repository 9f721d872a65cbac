"""Text utility functions for string formatting and manipulation."""
import re
import string
from datetime import date


ALPHANUMERIC = string.ascii_lowercase + string.ascii_uppercase + string.digits
"""Latin alphabet (lower then upper case) followed by the arabic digits."""


def capitalize_each_word(text: str) -> str:
    """Lower-case the text, then capitalize the first letter of each word.

    Only single spaces separate words, so runs of spaces are preserved.
    Unlike str.title() nothing after an apostrophe is capitalized.

    Args:
        text: Input string to convert

    Returns:
        Title-cased string

    Examples:
        >>> capitalize_each_word("hi all, i'm a repository")
        "Hi All, I'm A Repository"
        >>> capitalize_each_word("DON'T tell me")
        "Don't Tell Me"
    """
    if not text:
        return text
    return ' '.join(word[:1].upper() + word[1:] for word in text.lower().split(' '))


def remove_chars(text: str, to_remove: str) -> str:
    """Remove every character listed in ``to_remove`` from ``text``.

    >>> remove_chars("abcd", "bc")
    'ad'
    """
    if not to_remove:
        return text
    return re.sub(f"[{re.escape(to_remove)}]", "", text)


def current_year() -> int:
    return date.today().year


def current_month() -> int:
    """The current month as a number from 0 (January) to 11 (December)."""
    return date.today().month - 1


def current_day_of_week() -> int:
    """The current day as a number from 1 (Sunday) to 7 (Saturday)."""
    # isoweekday(): Monday=1 .. Sunday=7
    return date.today().isoweekday() % 7 + 1
