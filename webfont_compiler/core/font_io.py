"""
Font I/O utilities for traversing sources, opening buffers and writing outputs.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from fnmatch import fnmatch
from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING

from fontTools.ttLib import TTFont

from webfont_compiler.utils.logging import logger

if TYPE_CHECKING:
    from webfont_compiler.core.models import Artifact


def _matches(path: Path, root: Path, patterns: Iterable[str]) -> bool:
    relative = path.relative_to(root).as_posix()
    return any(fnmatch(path.name, p) or fnmatch(relative, p) for p in patterns)


def iter_files(
    directory: Path,
    include: Iterable[str] = ("*",),
    exclude: Iterable[str] | None = None,
) -> list[Path]:
    """
    Recursively collect files matching include patterns, sorted by path.

    Patterns match either the file name or the path relative to directory.

    Args:
        directory: Directory to search
        include: Glob patterns to include
        exclude: Glob patterns to drop from the result

    Returns:
        Paths to matching files
    """
    include = list(include)
    exclude = list(exclude or [])
    files = [
        path
        for path in sorted(directory.rglob("*"))
        if path.is_file() and _matches(path, directory, include)
    ]
    if exclude:
        files = [f for f in files if not _matches(f, directory, exclude)]
    return files


@contextmanager
def open_font(buffer: bytes) -> Iterator[TTFont]:
    """
    Context manager opening a font held in memory.

    Args:
        buffer: Font binary

    Yields:
        TTFont instance
    """
    font = TTFont(BytesIO(buffer), lazy=True)
    try:
        yield font
    finally:
        font.close()


def write_artifacts(artifacts: Iterable[Artifact]) -> None:
    """Write artifacts to disk, creating parent directories."""
    for artifact in artifacts:
        path = artifact.destination_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(artifact.contents, str):
            path.write_text(artifact.contents, encoding="utf-8")
        else:
            path.write_bytes(artifact.contents)
        logger.info(f"Wrote {path}")


def get_size_kb(data: bytes) -> float:
    """Get buffer size in kilobytes."""
    return len(data) / 1024
