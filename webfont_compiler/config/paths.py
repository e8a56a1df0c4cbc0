"""
Filesystem defaults for font builds.

Centralizes path and pattern definitions to avoid magic strings in operations.
"""

from pathlib import Path

SOURCE_DIR = Path("fonts")
DIST_DIR = Path("dist")

# Source font patterns picked up when no explicit include is given
FONT_PATTERNS = ("*.ttf", "*.woff", "*.otf", "*.eot", "*.svg")

# Markup scanned for characters when content compilation is enabled
CONTENT_PATTERNS = ("*.html",)

# Stylesheet written when embedding is enabled without an explicit path
EMBEDDED_STYLESHEET = "compiled-fonts.fonts.css"
