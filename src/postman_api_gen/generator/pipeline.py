"""Generation pipeline: normalize, materialize, resolve, aggregate."""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from postman_api_gen.config import GeneratorConfig
from postman_api_gen.exceptions import CollectionParseError, GenerationCancelled
from postman_api_gen.parser.base import CollectionItem
from postman_api_gen.prompts import ask_overwrite
from postman_api_gen.generator.aggregator import assemble
from postman_api_gen.generator.materializer import materialize
from postman_api_gen.generator.normalizer import normalize
from postman_api_gen.generator.resolver import resolve_imports, write_modules

logger = logging.getLogger(__name__)


def prepare_destination(
    config: GeneratorConfig,
    confirm: Callable[[Path], bool] = ask_overwrite,
) -> None:
    """Recreate the destination and its services directory.

    An existing destination is removed only after ``confirm`` agrees;
    otherwise :class:`GenerationCancelled` is raised and nothing is touched.
    """
    destination = config.destination
    if destination.exists():
        if not confirm(destination):
            raise GenerationCancelled("Canceled")
        logger.info("Removing %s", destination)
        shutil.rmtree(destination)

    destination.mkdir(parents=True)
    config.services_dir.mkdir()


def generate(
    collection: CollectionItem,
    config: GeneratorConfig,
    confirm: Callable[[Path], bool] = ask_overwrite,
) -> list[str]:
    """Generate the client under ``config.destination``.

    Returns the names of the top-level services.
    """
    tree = normalize(collection)
    if not isinstance(tree, dict):
        raise CollectionParseError("Collection root must be a folder")

    prepare_destination(config, confirm)

    services = materialize(tree, config.services_dir)
    resolve_imports(services, config.base_import)
    written = write_modules(services)
    logger.info("Wrote %d service modules", len(written))

    return assemble(config)
