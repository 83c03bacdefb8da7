"""Generator configuration.

One :class:`GeneratorConfig` is built per run, from an optional YAML file with
CLI flags layered on top, and handed to every pipeline stage explicitly.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from postman_api_gen.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DESTINATION = "./src/api"
DEFAULT_HOST = "documenter.gw.postman.com"
DEFAULT_BASE_IMPORT = "import { instance as axios } from '@/api/instance';"
DEFAULT_FORMATTER = ["npx", "prettier", "--write"]


class GeneratorConfig(BaseModel):
    """Settings shared by all pipeline stages."""

    destination: Path = Path(DEFAULT_DESTINATION)
    services_dirname: str = "services"
    host: str = DEFAULT_HOST
    base_import: str = DEFAULT_BASE_IMPORT
    formatter: list[str] = DEFAULT_FORMATTER
    run_formatter: bool = True

    @property
    def services_dir(self) -> Path:
        return self.destination / self.services_dirname


def load_config_file(path: Path) -> dict:
    """Read a YAML config file into a dict of :class:`GeneratorConfig` fields."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def build_config(config_file: Path | None = None, **overrides) -> GeneratorConfig:
    """Merge the config file (if any) with CLI overrides; ``None`` overrides are ignored."""
    values = load_config_file(config_file) if config_file else {}
    values.update({k: v for k, v in overrides.items() if v is not None})
    logger.debug("Resolved configuration: %s", values)

    try:
        return GeneratorConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
