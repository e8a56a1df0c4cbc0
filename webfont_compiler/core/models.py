"""
Records passed between build steps and returned to callers.
"""

from dataclasses import dataclass, field
from pathlib import Path

from webfont_compiler.core.errors import BuildFailure
from webfont_compiler.core.identity import FontIdentity


@dataclass
class FontAsset:
    """One input font file under processing."""

    source_path: Path
    source_root: Path
    dest_root: Path
    flavor: str
    input: bytes | None = None
    output: bytes | None = None
    identity: FontIdentity | None = None
    failure: BuildFailure | None = None

    @property
    def filename(self) -> str:
        """Output name: source stem with the flavor as extension."""
        return f"{self.source_path.stem}.{self.flavor}"

    @property
    def relative_path(self) -> Path:
        """Output path relative to the destination root."""
        try:
            parent = self.source_path.parent.relative_to(self.source_root)
        except ValueError:
            parent = Path()
        return parent / self.filename

    @property
    def destination_path(self) -> Path:
        return self.dest_root / self.relative_path

    def to_result(self) -> "FontResult":
        """Freeze the asset into the record callers see."""
        if self.failure is not None:
            return FontResult(source_path=self.source_path, error=self.failure)
        return FontResult(
            source_path=self.source_path,
            destination_path=self.destination_path,
            relative_path=self.relative_path,
            filename=self.filename,
            contents=self.output,
        )


@dataclass(frozen=True)
class FontResult:
    """
    Per-font outcome.

    Successful results carry the destination and output buffer; failed ones
    only the source path and the error.
    """

    source_path: Path
    destination_path: Path | None = None
    relative_path: Path | None = None
    filename: str | None = None
    contents: bytes | None = None
    error: BuildFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Artifact:
    """A file for the writer collaborator."""

    destination_path: Path
    contents: bytes | str


@dataclass
class BuildReport:
    """Everything a build produced, in input order."""

    results: list[FontResult] = field(default_factory=list)
    stylesheet: Artifact | None = None

    @property
    def succeeded(self) -> list[FontResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[FontResult]:
        return [r for r in self.results if not r.ok]

    def artifacts(self) -> list[Artifact]:
        """Files to write: successful fonts followed by the stylesheet."""
        artifacts = [Artifact(r.destination_path, r.contents) for r in self.succeeded]
        if self.stylesheet is not None:
            artifacts.append(self.stylesheet)
        return artifacts
