"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from . import generate
from .errors import GenError
from .options import GeneratorOptions, load_options, parse_import


class CliError(Exception):
    """Custom CLI error."""


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("input_path", type=click.Path(path_type=str))
@click.argument("output_path", type=click.Path(path_type=str))
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="YAML file with derives, imports and annotations",
)
@click.option(
    "--derive",
    "derives",
    multiple=True,
    help="Extra derive added to every struct and enum (repeatable)",
)
@click.option(
    "--import",
    "imports",
    multiple=True,
    help="Import rendered as 'use MODULE::SYMBOL;' (repeatable)",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(
    input_path: str,
    output_path: str,
    config_path: str | None,
    derives: tuple[str, ...],
    imports: tuple[str, ...],
    verbose: bool,
) -> None:
    """Generate Rust type definitions from an OpenAPI document."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        options = load_options(config_path) if config_path else GeneratorOptions()
        options = options.with_derives(*derives).with_imports(*(parse_import(i) for i in imports))
        generate(input_path, output_path, options)
    except (GenError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(output_path)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
