"""
Build pipeline orchestration.

Runs content scanning, per-font subsetting, @font-face synthesis and
stylesheet emission for one build.
"""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from webfont_compiler.config.options import BuildOptions
from webfont_compiler.core.errors import BuildFailure
from webfont_compiler.core.font_io import get_size_kb, iter_files
from webfont_compiler.core.identity import extract_identity
from webfont_compiler.core.models import Artifact, BuildReport, FontAsset, FontResult
from webfont_compiler.operations.content import build_corpus
from webfont_compiler.operations.embed import EmbeddingRegistry, font_face
from webfont_compiler.operations.subset import invoke_subset, subset_parameters
from webfont_compiler.pipeline.collaborators import Collaborators
from webfont_compiler.utils.logging import logger


class FontCompiler:
    """
    Compiles source fonts into subsetted web fonts.

    Each compile() call is one build run: the content corpus, the embedding
    registry and the output collection are reset at its start.
    """

    def __init__(self, options: BuildOptions, collaborators: Collaborators | None = None):
        self.options = options
        self.collaborators = collaborators or Collaborators()
        self.registry = EmbeddingRegistry()
        self.collection: list[FontResult] = []
        self.corpus: str | None = None

    def build_corpus(self) -> str:
        """Scan configured content once per build; "" when not configured."""
        if self.corpus is not None:
            return self.corpus

        content = self.options.compile_content
        if content is None:
            self.corpus = ""
            return self.corpus

        root = content.resolve_root(self.options.source_dir)
        logger.info(f"Scanning content in {root}")
        self.corpus = build_corpus(
            root,
            content.include,
            content.exclude_patterns,
            walk=self.collaborators.walk,
        )
        return self.corpus

    @property
    def text(self) -> str:
        """Characters to keep: explicit text wins over the scanned corpus."""
        return self.options.text or self.build_corpus()

    def discover(self) -> list[Path]:
        """Find source fonts under the source directory."""
        return list(
            self.collaborators.walk(
                self.options.source_dir, self.options.include, self.options.exclude
            )
        )

    def build(self, source_path: Path) -> tuple[FontResult, str | None]:
        """
        Process one font.

        Args:
            source_path: Source font file

        Returns:
            (result, @font-face fragment or None)
        """
        options = self.options
        asset = FontAsset(
            source_path=Path(source_path),
            source_root=options.source_dir,
            dest_root=options.dest_dir,
            flavor=options.output_type,
        )

        try:
            asset.input = asset.source_path.read_bytes()
        except OSError as e:
            asset.failure = BuildFailure.from_exception(e)
            logger.error(f"Failed to read {asset.source_path}: {e}")
            return asset.to_result(), None

        parameters = subset_parameters(self.text, options.unicodes, options.flavor)
        logger.debug(f"  {asset.source_path.name}: unicodes={parameters.unicodes}")

        output = invoke_subset(asset.input, parameters, self.collaborators.subset)
        if isinstance(output, BuildFailure):
            asset.failure = output
            logger.error(f"Failed to subset {asset.source_path}: {output.message}")
            return asset.to_result(), None
        asset.output = output

        logger.info(
            f"Subset {asset.source_path.name} -> {asset.relative_path} "
            f"({get_size_kb(asset.input):.1f} KB -> {get_size_kb(output):.1f} KB)"
        )

        fragment = None
        if options.embedding:
            asset.identity = extract_identity(
                output,
                fallback_name=asset.source_path.stem,
                read_metadata=self.collaborators.read_metadata,
            )
            if asset.identity is None:
                logger.warning(f"No usable identity for {asset.source_path.name}; not embedded")
            else:
                fragment = font_face(asset.identity, output, options.output_type)

        return asset.to_result(), fragment

    def stylesheet(self) -> Artifact | None:
        """Stylesheet artifact, or None when nothing was embedded."""
        path = self.options.embedded_path
        contents = self.registry.flush()
        if path is None or contents is None:
            return None
        return Artifact(destination_path=path, contents=contents)

    def compile(self, fonts: Iterable[Path] | None = None, *, write: bool = True) -> BuildReport:
        """
        Run the whole build.

        Args:
            fonts: Source fonts; discovered under source_dir when omitted
            write: Hand successful outputs and the stylesheet to the writer

        Returns:
            BuildReport with results in input order

        Raises:
            ConfigurationError: If the content source does not exist
        """
        # Each call is a fresh build run
        self.registry.clear()
        self.collection = []
        self.corpus = None

        # The corpus must exist before any font is subset
        self.build_corpus()

        fonts = list(fonts) if fonts is not None else self.discover()
        logger.info(f"Compiling {len(fonts)} fonts to {self.options.output_type}")

        if self.options.jobs > 1 and len(fonts) > 1:
            with ThreadPoolExecutor(max_workers=self.options.jobs) as pool:
                outcomes = list(pool.map(self.build, fonts))
        else:
            outcomes = [self.build(font) for font in fonts]

        report = BuildReport()
        for result, fragment in outcomes:
            report.results.append(result)
            if not result.ok:
                continue
            if fragment is not None:
                self.registry.record(fragment)
            self.collection.append(result)

        report.stylesheet = self.stylesheet()
        if self.options.embedding and report.stylesheet is None:
            logger.info("No fonts embedded; stylesheet skipped")

        if write:
            artifacts = report.artifacts()
            if artifacts:
                self.collaborators.write(artifacts)

        logger.info(
            f"Compiled {len(report.succeeded)}/{len(report.results)} fonts"
            + (f", {len(self.registry)} embedded" if self.options.embedding else "")
        )
        return report


def clean_outputs(
    dest_dir: Path,
    output_type: str = "woff2",
    stylesheet: Path | None = None,
) -> int:
    """
    Remove generated fonts and compiled stylesheets from dest_dir.

    Args:
        dest_dir: Output directory
        output_type: Extension of generated fonts
        stylesheet: Embedded stylesheet written to a custom path

    Returns:
        Number of files removed
    """
    if not dest_dir.exists():
        logger.info(f"{dest_dir}/ does not exist (skipped)")
        return 0

    removed = 0
    for path in iter_files(dest_dir, [f"*.{output_type}", "*.fonts.css"]):
        path.unlink()
        logger.debug(f"  Removed {path}")
        removed += 1

    if stylesheet is not None and stylesheet.is_file():
        stylesheet.unlink()
        logger.debug(f"  Removed {stylesheet}")
        removed += 1

    logger.info(f"Removed {removed} files from {dest_dir}/")
    return removed
