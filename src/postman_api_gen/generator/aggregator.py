"""Aggregator assembler: top-level files of the generated client.

Writes the services barrel module and copies the boilerplate assets next to
it. The ``ApiManager`` asset gets one private field and one getter per
top-level service.
"""

import logging
from pathlib import Path

from postman_api_gen.config import GeneratorConfig
from postman_api_gen.parser.names import public_name
from postman_api_gen.generator.tree import INDEX_FILENAME

logger = logging.getLogger(__name__)

ASSETS_DIR = Path(__file__).parent.parent / "assets"
FACADE_ASSET = "ApiManager"
FIELDS_SLOT = "{servicesFields}"
GETTERS_SLOT = "{servicesGetters}"


def list_services(services_dir: Path) -> list[str]:
    """Names of the top-level service directories, sorted."""
    return sorted(entry.name for entry in services_dir.iterdir() if entry.is_dir())


def render_barrel(services: list[str]) -> str:
    imports = [f"import {{ {binding} }} from './{binding}';" for binding in services]
    exports = [
        binding if public_name(binding) == binding else f"{binding} as {public_name(binding)}"
        for binding in services
    ]
    return "\n".join(imports) + f"\n\nexport {{ {', '.join(exports)} }};\n"


def render_facade(template: str, services: list[str]) -> str:
    fields = []
    getters = []
    for binding in services:
        name = public_name(binding)
        private = f"#{name}Service"
        fields.append(f"{private} = this.proxyService(services.{name}());")
        getters.append(
            "/**\n"
            f"   * @returns {{ReturnType<typeof services.{name}>}}\n"
            "   */\n"
            f"  get {name}() {{\n"
            f"    return this.{private};\n"
            "  }"
        )

    content = template.replace(FIELDS_SLOT, "\n  ".join(fields))
    return content.replace(GETTERS_SLOT, "\n\n  ".join(getters))


def load_assets() -> dict[str, str]:
    return {
        path.stem: path.read_text(encoding="utf-8")
        for path in sorted(ASSETS_DIR.glob("*.js"))
    }


def assemble(config: GeneratorConfig) -> list[str]:
    """Write the barrel module and the assets; return the top-level services."""
    services = list_services(config.services_dir)
    logger.debug("Top-level services: %s", services)

    barrel = config.services_dir / INDEX_FILENAME
    barrel.write_text(render_barrel(services), encoding="utf-8")

    for name, content in load_assets().items():
        if name == FACADE_ASSET:
            content = render_facade(content, services)
        (config.destination / f"{name}.js").write_text(content, encoding="utf-8")

    return services
