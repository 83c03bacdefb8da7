"""Best-effort formatting of the generated files."""

import logging
import subprocess

from postman_api_gen.config import GeneratorConfig

logger = logging.getLogger(__name__)


def format_output(config: GeneratorConfig) -> subprocess.Popen | None:
    """Start the formatter over every generated ``.js`` file and return without waiting."""
    if not config.run_formatter:
        return None

    pattern = f"{config.destination.as_posix()}/**/*.js"
    try:
        return subprocess.Popen(
            [*config.formatter, pattern],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        logger.debug("Formatter %s did not start: %s", config.formatter, e)
        return None
