"""Cheap syntactic pre-check for tokens and secrets.

The remote server is the real authority. This only catches strings that
could never be valid (non-ASCII, whitespace, characters that are not legal
unescaped in a URL query value) so they fail without a network round trip.
"""

import re

# Characters legal in an unescaped query value, ending on a non-punctuation one
_LIKELY_VALID = re.compile(r"[-a-zA-Z0-9+&@#/%?=~_!:,.;]*[-a-zA-Z0-9+&@#/%=~_]")


def is_likely_valid(value: str) -> bool:
    """Return True if ``value`` could plausibly be a token or secret."""
    if not isinstance(value, str):
        return False
    return _LIKELY_VALID.fullmatch(value) is not None
