"""CLI entry point for postman-api-gen."""

import logging
import sys
from pathlib import Path

import click

from postman_api_gen.config import GeneratorConfig, build_config
from postman_api_gen.exceptions import PostmanApiGenError
from postman_api_gen.parser.base import CollectionItem
from postman_api_gen.parser.postman import (
    fetch_collection,
    load_collection_file,
    parse_collection,
    resolve_collection_path,
)
from postman_api_gen.prompts import ask_collection_url, ask_destination, ask_overwrite
from postman_api_gen.generator.formatter import format_output
from postman_api_gen.generator.pipeline import generate as generate_client

logger = logging.getLogger(__name__)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def main(verbose: bool):
    """Postman API Gen: generate a JavaScript API client from a published Postman collection."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_collection(source: str | None, collection_file: Path | None, config: GeneratorConfig) -> CollectionItem:
    if collection_file is not None:
        click.echo(f"Reading collection from {collection_file}...")
        document = load_collection_file(collection_file)
    else:
        path = resolve_collection_path(source or ask_collection_url())
        click.echo("Fetching data from server...")
        document = fetch_collection(path, config.host)
    click.echo("Data loaded!")
    return parse_collection(document)


@main.command()
@click.argument("source", required=False)
@click.option("--file", "collection_file", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Read the collection from a local JSON export instead of fetching it.")
@click.option("--outdir", type=click.Path(path_type=Path), default=None, help="Destination directory for the generated client.")
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="YAML config file.")
@click.option("--host", default=None, help="Documenter gateway host.")
@click.option("-y", "--yes", is_flag=True, help="Overwrite an existing destination without asking.")
@click.option("--format/--no-format", "run_formatter", default=None, help="Run the formatter over the generated files.")
def generate(source: str | None, collection_file: Path | None, outdir: Path | None, config_file: Path | None, host: str | None, yes: bool, run_formatter: bool | None):
    """Generate service modules from a published collection URL (SOURCE)."""
    try:
        config = build_config(config_file, destination=outdir, host=host, run_formatter=run_formatter)
        if "destination" not in config.model_fields_set:
            config = config.model_copy(update={"destination": ask_destination()})

        collection = _load_collection(source, collection_file, config)

        click.echo("Handling data...")
        confirm = (lambda destination: True) if yes else ask_overwrite
        services = generate_client(collection, config, confirm=confirm)
        click.echo(f"API template generated! ({len(services)} services in {config.destination})")

        if config.run_formatter:
            click.echo("Formatting...")
            format_output(config)
        click.echo("Done!")
    except PostmanApiGenError as e:
        logger.debug("Generation failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)
    except OSError as e:
        logger.debug("Storage error", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
