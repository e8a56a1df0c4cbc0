"""
Content corpus operations.

Collects visible text from markup files so subsetting can keep only the
characters a site actually uses.
"""

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from bs4 import BeautifulSoup, Comment

from webfont_compiler.core.errors import ConfigurationError
from webfont_compiler.core.font_io import iter_files
from webfont_compiler.utils.logging import logger

# Elements whose text never reaches the page
INVISIBLE_TAGS = ["script", "style", "template", "noscript"]

Walker = Callable[[Path, Sequence[str], Sequence[str]], Iterable[Path]]


def strip_markup(markup: str) -> str:
    """
    Reduce markup to its visible text.

    Tags, attributes, comments and script/style bodies are dropped and
    runs of whitespace collapse to a single space.
    """
    soup = BeautifulSoup(markup, "html.parser")
    for element in soup(INVISIBLE_TAGS):
        element.decompose()
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    return " ".join(soup.get_text(" ").split())


def read_text(path: Path) -> str:
    """Read one markup file as plain text, or "" if it cannot be read."""
    try:
        markup = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Skipping unreadable content file {path}: {e}")
        return ""
    return strip_markup(markup)


def build_corpus(
    root: Path,
    include: Sequence[str],
    exclude: Sequence[str] = (),
    walk: Walker = iter_files,
) -> str:
    """
    Build the content corpus for a build.

    An empty result means no content was scanned, not that every
    character is excluded.

    Args:
        root: Directory holding markup sources
        include: Glob patterns for markup files
        exclude: Glob patterns to skip
        walk: Traversal collaborator

    Returns:
        Visible text of all matched files joined with single spaces

    Raises:
        ConfigurationError: If root does not exist
    """
    if not root.is_dir():
        raise ConfigurationError(f"Content source not found: {root}")

    chunks = []
    files = list(walk(root, include, exclude))
    for path in files:
        text = read_text(path)
        if text:
            chunks.append(text)

    corpus = " ".join(chunks)
    logger.info(
        f"Scanned {len(files)} content files ({len(chunks)} with text, "
        f"{len(set(corpus))} distinct characters)"
    )
    return corpus
