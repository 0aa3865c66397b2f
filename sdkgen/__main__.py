"""Entry point: python -m sdkgen

Reads a config file (or --spec/--name), renders the client for every
API it lists and writes the files into the output directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .codegen import render, write_outputs
from .config import read_config
from .errors import SdkgenError, VerificationError
from .languages import LANGUAGES


@click.command()
@click.argument("config_path", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--language", type=click.Choice(sorted(LANGUAGES)), help="Target language.")
@click.option("--spec", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Swagger document to generate from.")
@click.option("--name", help="API name (required with --spec).")
@click.option("--class-name", help="Generated API class name; defaults to --name.")
@click.option("--base-path", help="Path prefix for every method.")
@click.option("--package-name", help="Package name for the JS client.")
@click.option("-o", "--output", type=click.Path(file_okay=False, path_type=Path), help="Output directory.")
@click.option("--snake", is_flag=True, help="Use the document's parameter names for JS arguments.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
def main(config_path, language, spec, name, class_name, base_path, package_name, output, snake, verbose):
    """Generate Swift, Kotlin or JS clients from Swagger documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = read_config(
            config_path,
            language=language,
            spec=spec,
            name=name,
            class_name=class_name,
            base_path=base_path,
            package_name=package_name,
            output=output,
        )
        outputs = render(config.language, config.apis, {"snake": snake})
    except VerificationError as exc:
        for problem in exc.diagnostics:
            click.echo(str(problem), err=True)
        raise click.ClickException(f"{len(exc.diagnostics)} problem(s) found, nothing written") from exc
    except SdkgenError as exc:
        raise click.ClickException(str(exc)) from exc

    for path in write_outputs(outputs, config.output):
        click.echo(f"Generated {path}")


if __name__ == "__main__":
    main()
