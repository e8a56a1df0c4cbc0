"""Shared pytest fixtures."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from webfont_compiler.pipeline.collaborators import Collaborators

# Characters the test font covers, mapped to glyph names
TEST_CHARS = {
    " ": "space",
    "A": "A",
    "H": "H",
    "e": "e",
    "l": "l",
    "o": "o",
    "é": "eacute",
    "ж": "zhe",
}


def _box_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((50, 0))
    pen.lineTo((50, 700))
    pen.lineTo((450, 700))
    pen.lineTo((450, 0))
    pen.closePath()
    return pen.glyph()


def build_test_font(path: Path, family: str = "Test Sans", style: str = "Regular") -> Path:
    """Write a minimal TrueType font covering TEST_CHARS."""
    glyph_order = [".notdef", *TEST_CHARS.values()]
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({ord(c): name for c, name in TEST_CHARS.items()})
    glyphs = {name: _box_glyph() for name in glyph_order}
    glyphs["space"] = TTGlyphPen(None).glyph()
    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics({name: (500, 50) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": style})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    path.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(path))
    return path


class FakeToolchain:
    """Recording stand-ins for the subsetter, metadata reader and writer."""

    def __init__(self, metadata=None, reject=()):
        self.metadata = metadata or {}
        self.reject = set(reject)
        self.subset_calls = []
        self.metadata_calls = []
        self.written = []

    def subset(self, buffer, unicodes=None, text=None, flavor=None):
        self.subset_calls.append({"unicodes": unicodes, "text": text, "flavor": flavor})
        if buffer in self.reject:
            raise ValueError(f"Unsupported font: {buffer.decode()}")
        return b"subset:" + buffer

    def read_metadata(self, buffer):
        self.metadata_calls.append(buffer)
        if not buffer.startswith(b"subset:"):
            raise KeyError(buffer)
        key = buffer.removeprefix(b"subset:")
        if key not in self.metadata:
            raise KeyError(key)
        return self.metadata[key]

    def write(self, artifacts):
        self.written.extend(artifacts)

    def collaborators(self) -> Collaborators:
        return Collaborators(
            subset=self.subset,
            read_metadata=self.read_metadata,
            write=self.write,
        )


def properties(family=None, style=None):
    """Metadata in the shape returned by the metadata reader."""
    props = []
    if family is not None:
        props.append({"name": "font-family", "text": family})
    if style is not None:
        props.append({"name": "font-subfamily", "text": style})
    return {"properties": props}


@pytest.fixture
def temp_font_dir(tmp_path):
    """Create a temporary directory for font testing."""
    path = tmp_path / "fonts"
    path.mkdir()
    return path


@pytest.fixture
def dist_dir(tmp_path):
    return tmp_path / "dist"


@pytest.fixture
def test_font(temp_font_dir):
    """A real TrueType font named Test Sans Regular."""
    return build_test_font(temp_font_dir / "TestSans-Regular.ttf")
