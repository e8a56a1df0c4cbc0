"""
Collaborators the build pipeline delegates to.

The defaults work on the local filesystem with fontTools; tests and host
build systems pass their own.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from webfont_compiler.core.font_io import iter_files, write_artifacts
from webfont_compiler.core.identity import MetadataReader, read_font_metadata
from webfont_compiler.core.models import Artifact
from webfont_compiler.operations.content import Walker
from webfont_compiler.operations.subset import Subsetter, subset_buffer


@dataclass(frozen=True)
class Collaborators:
    """Traversal, subsetting, metadata and writing primitives."""

    walk: Walker = iter_files
    subset: Subsetter = subset_buffer
    read_metadata: MetadataReader = read_font_metadata
    write: Callable[[Iterable[Artifact]], None] = write_artifacts
