"""
Build options.

Options can be constructed directly or loaded from a mapping using the
camelCase keys of bundler-style configuration (compileContent, outputType).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from webfont_compiler.config.paths import (
    CONTENT_PATTERNS,
    DIST_DIR,
    EMBEDDED_STYLESHEET,
    FONT_PATTERNS,
    SOURCE_DIR,
)
from webfont_compiler.core.errors import ConfigurationError
from webfont_compiler.utils.logging import logger

# Output flavors accepted by the subsetter; None means plain sfnt
FLAVORS = {"woff2": "woff2", "woff": "woff", "ttf": None, "otf": None}

DEFAULT_FLAVOR = "woff2"


@dataclass(frozen=True)
class ContentScanOptions:
    """Markup sources scanned to decide which characters to keep."""

    source: str | None = None
    include: tuple[str, ...] = CONTENT_PATTERNS
    exclude: tuple[str, ...] = ()
    ignore: tuple[str, ...] = ()

    @property
    def exclude_patterns(self) -> tuple[str, ...]:
        return self.exclude + self.ignore

    def resolve_root(self, source_dir: Path) -> Path:
        """
        Resolve the directory to scan.

        No source scans the build source directory; a source starting with
        "." is relative to the working directory; any other relative source
        is relative to the build source directory.
        """
        if not self.source:
            return source_dir
        source = Path(self.source)
        if source.is_absolute():
            return source
        if self.source.startswith("."):
            return Path.cwd() / source
        return source_dir / source


@dataclass
class BuildOptions:
    """Options for a single build run."""

    source_dir: Path = SOURCE_DIR
    dest_dir: Path = DIST_DIR
    include: tuple[str, ...] = FONT_PATTERNS
    exclude: tuple[str, ...] = ()
    compile_content: ContentScanOptions | None = None
    embedded: str | bool | None = None
    text: str | None = None
    unicodes: str | None = None
    output_type: str = DEFAULT_FLAVOR
    jobs: int = 1

    def __post_init__(self):
        self.source_dir = Path(self.source_dir)
        self.dest_dir = Path(self.dest_dir)
        if self.output_type not in FLAVORS:
            raise ConfigurationError(
                f"Unsupported output type '{self.output_type}'. "
                f"Expected one of: {', '.join(FLAVORS)}."
            )
        if self.jobs < 1:
            raise ConfigurationError(f"jobs must be at least 1, got {self.jobs}")

    @property
    def flavor(self) -> str | None:
        """fontTools flavor for the output type."""
        return FLAVORS[self.output_type]

    @property
    def embedding(self) -> bool:
        return bool(self.embedded)

    @property
    def embedded_path(self) -> Path | None:
        """Stylesheet destination, relative paths resolved under dest_dir."""
        if not self.embedded:
            return None
        if self.embedded is True:
            return self.dest_dir / EMBEDDED_STYLESHEET
        path = Path(self.embedded)
        if path.is_absolute():
            return path
        return self.dest_dir / path

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        source_dir: Path | str = SOURCE_DIR,
        dest_dir: Path | str = DIST_DIR,
    ) -> "BuildOptions":
        """
        Load options from a configuration mapping.

        Args:
            mapping: Keys compileContent, embedded, text, unicodes, outputType,
                include, exclude, jobs (snake_case spellings also accepted)
            source_dir: Directory holding source fonts
            dest_dir: Output directory

        Returns:
            BuildOptions instance

        Raises:
            ConfigurationError: On values of the wrong shape
        """
        values = {_snake_case(k): v for k, v in mapping.items()}
        known = {
            "include",
            "exclude",
            "compile_content",
            "embedded",
            "text",
            "unicodes",
            "output_type",
            "jobs",
        }
        kwargs: dict[str, Any] = {k: v for k, v in values.items() if k in known}
        for key in sorted(set(values) - known):
            logger.warning(f"Ignoring unknown option '{key}'")

        if "include" in kwargs:
            kwargs["include"] = _patterns(kwargs["include"], "include")
        if "exclude" in kwargs:
            kwargs["exclude"] = _patterns(kwargs["exclude"], "exclude")
        if "compile_content" in kwargs:
            kwargs["compile_content"] = _content_options(kwargs["compile_content"])

        return cls(source_dir=Path(source_dir), dest_dir=Path(dest_dir), **kwargs)


def _snake_case(key: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in key)


def _patterns(value: Any, name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise ConfigurationError(f"'{name}' must be a pattern or a list of patterns")


def _content_options(value: Any) -> ContentScanOptions | None:
    if value is None or value is False:
        return None
    if value is True:
        return ContentScanOptions()
    if not isinstance(value, Mapping):
        raise ConfigurationError("'compileContent' must be a boolean or a mapping")
    include = value.get("include")
    return ContentScanOptions(
        source=value.get("source"),
        include=_patterns(include, "include") if include is not None else CONTENT_PATTERNS,
        exclude=_patterns(value.get("exclude"), "exclude"),
        ignore=_patterns(value.get("ignore"), "ignore"),
    )
