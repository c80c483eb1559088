"""
Converts a Markdown file to WordPress Gutenberg block markup.
The result is printed to stdout, or written to a file with `--output`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from . import __version__
from .config import ConfigError, build_config
from .filesystem import (
    ReadFileError,
    get_max_file_size,
    normalize_filepath,
    normalize_output_path,
    read_markdown,
    write_output,
)
from .pipeline import convert_content

__all__ = ["cli"]


@click.command()
@click.version_option(version=__version__, prog_name="md-gutenberg")
@click.option(
    "--strip-ai-commentary/--keep-ai-commentary",
    default=None,
    help="Remove assistant preamble and postamble lines",
)
@click.option(
    "--enhance/--no-enhance",
    default=None,
    help="Expand <!-- @hint --> markers into custom blocks",
)
@click.option("--json", "as_json", is_flag=True, help='Print a {"content": ...} JSON payload')
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    help="Write the result to a file instead of stdout",
)
@click.option("-v", "--verbose", is_flag=True, help="Log pipeline decisions to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    strip_ai_commentary: bool | None = None,
    enhance: bool | None = None,
    as_json: bool = False,
    output: str | None = None,
    verbose: bool = False,
):
    """
    Entry point for converting a Markdown file to Gutenberg blocks.

    Args:
        filepath: Path to the Markdown file to convert.
        strip_ai_commentary: Override for the commentary stripping stage.
        enhance: Override for the hint expansion stage.
        as_json: Emit the request-boundary JSON payload instead of raw markup.
        output: Destination file; stdout when omitted.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If CLI parameters reference invalid paths or the
            configuration contains invalid values.
        click.ClickException: If the input is too large, cannot be decoded, or
            the output cannot be written.

    Examples:
        md-gutenberg draft.md --strip-ai-commentary --enhance -o draft.html
    """
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    base_dir = Path.cwd().resolve()
    try:
        source = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    destination = None
    if output is not None:
        try:
            destination = normalize_output_path(output, base_dir)
        except ValueError as error:
            raise click.BadParameter(str(error)) from error
        if destination == source:
            raise click.BadParameter("Output file must differ from the input file.")

    try:
        config = build_config(
            source.parent,
            strip_ai_commentary=strip_ai_commentary,
            enhance=enhance,
            output_format="json" if as_json else None,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        content = read_markdown(source, max_file_size)
    except ReadFileError as error:
        raise click.ClickException(str(error)) from error

    if not content.strip():
        click.echo(f"Warning: {source} is empty.", err=True)

    converted = convert_content(
        content,
        strip_ai_commentary=config.strip_ai_commentary,
        enhance=config.enhance,
    )
    if config.output_format == "json":
        converted = json.dumps({"content": converted}, ensure_ascii=False)

    # Writes to file
    if destination is not None:
        try:
            write_output(destination, converted)
        except IOError as error:
            raise click.ClickException(str(error)) from error
    # Prints to stdout
    else:
        click.echo(converted)


if __name__ == "__main__":
    cli()
