"""
Subsetted web-font builds with optional inline @font-face stylesheets.
"""

__version__ = "0.1.0"
