"""
Font subsetting operations.

Computes subsetting parameters for a build and runs the subsetter on
in-memory font buffers.
"""

from collections.abc import Callable
from dataclasses import dataclass
from io import BytesIO

from fontTools import subset

from webfont_compiler.config.unicode_ranges import default_unicodes
from webfont_compiler.core.errors import BuildFailure
from webfont_compiler.utils.logging import logger

Subsetter = Callable[..., bytes]


@dataclass(frozen=True)
class SubsetParameters:
    """Arguments for one subsetter call."""

    unicodes: str
    text: str | None = None
    flavor: str | None = "woff2"


def subset_parameters(
    text: str | None,
    unicodes: str | None = None,
    flavor: str | None = "woff2",
) -> SubsetParameters:
    """
    Decide which characters to keep.

    Without text the range is ASCII plus Latin-1; with text it is ASCII only
    and the text supplies everything else. An explicit range replaces the
    computed one.

    Args:
        text: Content text, empty or None when no content was scanned
        unicodes: Explicit unicode range override
        flavor: Output flavor

    Returns:
        SubsetParameters
    """
    text = text or None
    return SubsetParameters(
        unicodes=unicodes or default_unicodes(has_text=text is not None),
        text=text,
        flavor=flavor,
    )


def subset_buffer(
    buffer: bytes,
    unicodes: str | None = None,
    text: str | None = None,
    flavor: str | None = "woff2",
) -> bytes:
    """
    Subset a font buffer with fontTools.

    Args:
        buffer: Source font binary
        unicodes: Unicode range string, e.g. "U+0000-007F,U+00A0-00FF"
        text: Characters to keep in addition to the range
        flavor: "woff2", "woff", or None for plain sfnt

    Returns:
        Subsetted font binary

    Raises:
        Whatever fontTools raises for unreadable fonts or bad options
    """
    options = subset.Options()
    options.flavor = flavor
    options.layout_features = ["*"]  # Keep all OpenType features
    options.notdef_outline = True
    options.recommended_glyphs = True

    font = subset.load_font(BytesIO(buffer), options)
    try:
        subsetter = subset.Subsetter(options)
        subsetter.populate(
            unicodes=subset.parse_unicodes(unicodes) if unicodes else [],
            text=text or "",
        )
        subsetter.subset(font)
        output = BytesIO()
        subset.save_font(font, output, options)
        return output.getvalue()
    finally:
        font.close()


def invoke_subset(
    buffer: bytes,
    parameters: SubsetParameters,
    subsetter: Subsetter = subset_buffer,
) -> bytes | BuildFailure:
    """
    Run the subsetter, converting any exception into a BuildFailure.

    Args:
        buffer: Source font binary
        parameters: Computed subsetting parameters
        subsetter: Subsetting collaborator

    Returns:
        Output buffer, or BuildFailure when the subsetter raised
    """
    try:
        return subsetter(
            buffer,
            unicodes=parameters.unicodes,
            text=parameters.text,
            flavor=parameters.flavor,
        )
    except Exception as e:
        logger.debug(f"  Subsetter raised {type(e).__name__}: {e}")
        return BuildFailure.from_exception(e)
