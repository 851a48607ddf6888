"""
Free-text cleaning applied to every log field before storage.
"""

import re
from typing import Optional

DEFAULT_MAX_LENGTH = 1000

# Opening or closing tag: "<", optional "/", an ASCII letter, anything up to ">"
HTML_TAG_PATTERN = re.compile(r"<(/)?[a-z][^>]*?>", re.IGNORECASE | re.ASCII)

# PostgreSQL TEXT cannot hold NUL
NUL = "\x00"

# Removed as one literal substring unless strip_shell_metacharacters is set
SHELL_PATTERN_LITERAL = "[;&|`$]"
SHELL_METACHARACTERS = re.compile(r"[;&|`$]")

SCRIPT_LITERALS = ("<script>", "</script>")


def sanitize(
    value: Optional[str],
    max_length: int = DEFAULT_MAX_LENGTH,
    strip_shell_metacharacters: bool = False
) -> Optional[str]:
    """
    Clean a free-text field.

    Steps, in order: drop NUL characters, trim whitespace, strip HTML-like
    tags, double single quotes, remove the shell pattern, remove script tag
    literals, truncate.

    Args:
        value: Raw input; None passes through unchanged
        max_length: Maximum length of the result
        strip_shell_metacharacters: Remove each of ; & | ` $ individually
            instead of only the literal substring "[;&|`$]"

    Returns:
        The cleaned string, or None
    """
    if value is None:
        return None

    cleaned = value.replace(NUL, "").strip()
    cleaned = HTML_TAG_PATTERN.sub("", cleaned)
    cleaned = cleaned.replace("'", "''")

    if strip_shell_metacharacters:
        cleaned = SHELL_METACHARACTERS.sub("", cleaned)
    else:
        cleaned = cleaned.replace(SHELL_PATTERN_LITERAL, "")

    for literal in SCRIPT_LITERALS:
        cleaned = cleaned.replace(literal, "")

    return cleaned[:max_length]
