"""
Main CLI entry point for webfont-compiler.
"""

import sys
from pathlib import Path

import click

from webfont_compiler import __version__
from webfont_compiler.config.options import FLAVORS
from webfont_compiler.config.paths import EMBEDDED_STYLESHEET


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log per-font details.")
def cli(verbose):
    """Subset fonts into web fonts and inline them as @font-face rules."""
    from webfont_compiler.utils.logging import set_verbose

    set_verbose(verbose)


@cli.command()
@click.argument("source", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("dest", type=click.Path(file_okay=False, path_type=Path))
@click.option("--include", multiple=True, help="Font glob pattern (repeatable).")
@click.option("--exclude", multiple=True, help="Glob pattern to skip (repeatable).")
@click.option(
    "--output-type",
    type=click.Choice(list(FLAVORS)),
    default="woff2",
    show_default=True,
    help="Output font format.",
)
@click.option("--unicodes", default=None, help="Explicit unicode range, e.g. U+0000-00FF.")
@click.option("--text", default=None, help="Literal characters to keep.")
@click.option(
    "--embedded",
    is_flag=False,
    flag_value=EMBEDDED_STYLESHEET,
    default=None,
    help="Write an inline @font-face stylesheet (optionally at PATH under DEST).",
)
@click.option("--compile-content", is_flag=True, help="Keep only characters used in markup.")
@click.option("--content-source", default=None, help="Directory of markup to scan.")
@click.option("--content-include", multiple=True, help="Markup glob pattern (repeatable).")
@click.option("--content-exclude", multiple=True, help="Markup pattern to skip (repeatable).")
@click.option("-j", "--jobs", type=click.IntRange(min=1), default=1, show_default=True)
def build(
    source,
    dest,
    include,
    exclude,
    output_type,
    unicodes,
    text,
    embedded,
    compile_content,
    content_source,
    content_include,
    content_exclude,
    jobs,
):
    """Compile fonts in SOURCE into DEST."""
    from webfont_compiler.config.options import BuildOptions
    from webfont_compiler.core.errors import ConfigurationError
    from webfont_compiler.pipeline.runner import FontCompiler
    from webfont_compiler.utils.logging import logger

    config = {"outputType": output_type, "unicodes": unicodes, "text": text, "jobs": jobs}
    if include:
        config["include"] = list(include)
    if exclude:
        config["exclude"] = list(exclude)
    if embedded is not None:
        config["embedded"] = embedded
    if compile_content or content_source or content_include:
        config["compileContent"] = {
            "source": content_source,
            "include": list(content_include) or None,
            "exclude": list(content_exclude),
        }

    try:
        options = BuildOptions.from_mapping(config, source_dir=source, dest_dir=dest)
        report = FontCompiler(options).compile()
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e

    if report.failed:
        logger.error(f"{len(report.failed)} fonts failed:")
        for result in report.failed:
            logger.error(f"  - {result.source_path}: {result.error.kind}: {result.error.message}")
        sys.exit(1)


@cli.command()
@click.argument("dest", type=click.Path(file_okay=False, path_type=Path))
@click.option("--output-type", type=click.Choice(list(FLAVORS)), default="woff2", show_default=True)
@click.option(
    "--embedded",
    default=None,
    help="Custom stylesheet PATH under DEST to remove as well.",
)
def clean(dest, output_type, embedded):
    """Remove generated fonts and *.fonts.css stylesheets from DEST."""
    from webfont_compiler.config.options import BuildOptions
    from webfont_compiler.pipeline.runner import clean_outputs

    stylesheet = BuildOptions(dest_dir=dest, embedded=embedded).embedded_path
    clean_outputs(dest, output_type, stylesheet)


@cli.command()
@click.argument("font", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(font):
    """Show the @font-face identity extracted from FONT."""
    from webfont_compiler.core.identity import extract_identity

    identity = extract_identity(font.read_bytes(), fallback_name=font.stem)
    if identity is None:
        click.echo(f"{font.name}: no usable identity")
        sys.exit(1)
    click.echo(f"family: {identity.family}")
    click.echo(f"style:  {identity.style}")
    click.echo(f"weight: {identity.weight}")


if __name__ == "__main__":
    cli()
