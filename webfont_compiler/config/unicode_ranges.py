"""
Unicode range definitions for font subsetting.

Reference: https://www.unicode.org/charts/
"""

BASIC_LATIN = "U+0000-007F"  # ASCII
LATIN1_SUPPLEMENT = "U+00A0-00FF"  # Latin-1 Supplement (printable part)

# Used when no content text is available to pick characters from
DEFAULT_RANGES = [BASIC_LATIN, LATIN1_SUPPLEMENT]


def default_unicodes(has_text: bool) -> str:
    """
    Compute the unicode range passed to the subsetter.

    ASCII is always kept. Latin-1 is only added as a fallback character set
    when there is no content text to derive exact coverage from.

    Args:
        has_text: Whether content text will be passed alongside the range

    Returns:
        Comma-separated unicode range string
    """
    if has_text:
        return BASIC_LATIN
    return ",".join(DEFAULT_RANGES)
