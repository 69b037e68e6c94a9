"""
Text normalization applied before any pattern matching.
"""

# Spanish diacritics folded to their plain letters
ACCENT_MAP = str.maketrans({
    'á': 'a', 'é': 'e', 'í': 'i', 'ó': 'o', 'ú': 'u',
    'ñ': 'n', 'ü': 'u', 'ç': 'c',
})


def remove_accents(text: str) -> str:
    """Replace accented characters with their unaccented equivalents."""
    return text.translate(ACCENT_MAP)


def normalize(text: str) -> str:
    """
    Lower-case a chat message and strip its accents.

    Args:
        text: Raw message text

    Returns:
        str: Normalized text used by every detector
    """
    return remove_accents(text.lower())
