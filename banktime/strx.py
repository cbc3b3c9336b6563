"""
Small string helpers.
"""


def or_(*candidates: str) -> str:
    """Return the first non-empty candidate, or an empty string."""
    for candidate in candidates:
        if candidate:
            return candidate
    return ""


def yes(text: str) -> bool:
    """Parse 'true' / 'yes' (any case, surrounding whitespace ignored) as True."""
    return text.strip().lower() in ("true", "yes")
