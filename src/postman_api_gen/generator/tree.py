"""In-memory mirror of the materialized services directory."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from postman_api_gen.parser.names import public_name
from postman_api_gen.generator.templates import ServiceModule

INDEX_FILENAME = "index.js"


@dataclass
class ServiceNode:
    """One service directory: its index module plus sub-service directories."""

    binding: str
    directory: Path
    module: ServiceModule
    children: list["ServiceNode"] = field(default_factory=list)

    @property
    def name(self) -> str:
        return public_name(self.binding)

    @property
    def index_path(self) -> Path:
        return self.directory / INDEX_FILENAME

    def walk(self) -> Iterator["ServiceNode"]:
        """Depth-first, parent before children."""
        yield self
        for child in self.children:
            yield from child.walk()

    def file_count(self) -> int:
        """Number of files under this directory (one index module per service)."""
        return sum(1 for _ in self.walk())


def is_leaf(node: ServiceNode) -> bool:
    """A service directory holding exactly one file needs no sub-imports."""
    return node.file_count() == 1


def iter_nodes(services: list[ServiceNode]) -> Iterator[ServiceNode]:
    for service in services:
        yield from service.walk()
