"""
Font identity extraction from name tables.

Turns a font's name table into the family/style/weight triple used for
@font-face declarations.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from webfont_compiler.core.font_io import open_font
from webfont_compiler.utils.logging import logger

# Full variable-font weight range; metadata weights are not read
DEFAULT_WEIGHT = "100 900"
DEFAULT_STYLE = "normal"

# Name table IDs exposed as metadata properties
NAME_PROPERTIES = {
    0: "copyright",
    1: "font-family",
    2: "font-subfamily",
    3: "unique-identifier",
    4: "name",
    5: "version",
    6: "postscript-name",
    16: "preferred-family",
    17: "preferred-subfamily",
}

FAMILY_PROPERTIES = ("name", "font-family")
STYLE_PROPERTY = "font-subfamily"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9\-_]")

MetadataReader = Callable[[bytes], dict[str, Any] | None]


@dataclass(frozen=True)
class FontIdentity:
    """Normalized font identity."""

    family: str  # e.g., "SourceSans3"
    style: str = DEFAULT_STYLE  # e.g., "normal", "italic", "bold"
    weight: str = DEFAULT_WEIGHT  # e.g., "100 900", "400"


def sanitize(text: str) -> str:
    """Strip every character outside [A-Za-z0-9-_]."""
    return _UNSAFE_CHARS.sub("", text)


def normalize_style(text: str) -> str:
    """Sanitize and lower-case a subfamily name, mapping regular to normal."""
    style = sanitize(text).lower()
    if style == "regular":
        return DEFAULT_STYLE
    return style


def read_font_metadata(buffer: bytes) -> dict[str, Any]:
    """
    Read name table entries from a font buffer.

    Args:
        buffer: Font binary (TTF, OTF, WOFF or WOFF2)

    Returns:
        {"properties": [{"name": ..., "text": ...}]} in name ID order

    Raises:
        Whatever fontTools raises for unreadable fonts
    """
    properties = []
    with open_font(buffer) as font:
        if "name" in font:
            name_table = font["name"]
            for name_id, property_name in NAME_PROPERTIES.items():
                text = name_table.getDebugName(name_id)
                if text is not None:
                    properties.append({"name": property_name, "text": text})
    return {"properties": properties}


def _find_property(properties: list[dict[str, Any]], *names: str) -> str | None:
    for prop in properties:
        if prop.get("name") in names:
            return prop.get("text") or ""
    return None


def extract_identity(
    buffer: bytes,
    fallback_name: str,
    read_metadata: MetadataReader = read_font_metadata,
) -> FontIdentity | None:
    """
    Extract a font identity, or None when the font cannot be embedded.

    Never raises: a reader failure or unusable metadata yields None.

    Args:
        buffer: Font binary
        fallback_name: Family used when metadata has no family (file base name)
        read_metadata: Metadata reader collaborator

    Returns:
        FontIdentity with non-empty fields, or None
    """
    try:
        metadata = read_metadata(buffer)
    except Exception as e:
        logger.debug(f"  Metadata unreadable for {fallback_name}: {e}")
        return None

    if not metadata:
        logger.debug(f"  No metadata for {fallback_name}")
        return None

    properties = metadata.get("properties") or []

    family_text = _find_property(properties, *FAMILY_PROPERTIES)
    family = sanitize(family_text if family_text is not None else fallback_name)

    style_text = _find_property(properties, STYLE_PROPERTY)
    style = normalize_style(style_text) if style_text is not None else DEFAULT_STYLE

    if not family or not style:
        logger.debug(f"  Unusable identity for {fallback_name}")
        return None

    return FontIdentity(family=family, style=style)
