"""
Inline @font-face embedding.

Renders fonts as base64 data URIs and collects the declarations for a
single stylesheet.
"""

import base64
import threading
from collections.abc import Iterator

from webfont_compiler.core.identity import FontIdentity

# flavor -> (MIME subtype, CSS format hint)
FONT_FORMATS = {
    "woff2": ("woff2", "woff2"),
    "woff": ("woff", "woff"),
    "ttf": ("ttf", "truetype"),
    "otf": ("otf", "opentype"),
}


def font_face(identity: FontIdentity, contents: bytes, output_type: str = "woff2") -> str:
    """Render one @font-face declaration with the font inlined."""
    mime, hint = FONT_FORMATS[output_type]
    data = base64.b64encode(contents).decode("ascii")
    return (
        "@font-face {"
        f"font-family: '{identity.family}';"
        f"font-style: {identity.style};"
        f"font-weight: {identity.weight};"
        f"src: url('data:font/{mime};charset=utf-8;base64,{data}') format('{hint}');"
        "}"
    )


class EmbeddingRegistry:
    """
    Ordered collection of @font-face declarations for one build.

    Entries are never deduplicated. Appends are thread-safe.
    """

    def __init__(self):
        self._entries: list[str] = []
        self._lock = threading.Lock()

    def record(self, entry: str) -> None:
        with self._lock:
            self._entries.append(entry)

    def flush(self) -> str | None:
        """
        Return the stylesheet text, or None when nothing was recorded.

        Does not clear the registry.
        """
        with self._lock:
            if not self._entries:
                return None
            return " ".join(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._entries))
