"""Structure rediscovery and import resolution.

The resolver only looks at the shape of the materialized tree: a service
whose directory holds a single file is a leaf, anything else is composite
and imports each of its direct children. Composite modules are resolved
first, depth-first; every module still open afterwards is a leaf and gets the
base import alone. Files are written once all slots are filled.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from postman_api_gen.generator.templates import ImportStatement, ServiceEntry
from postman_api_gen.generator.tree import ServiceNode, is_leaf, iter_nodes

logger = logging.getLogger(__name__)


@dataclass
class ServiceShape:
    """Structural description of one service directory."""

    node: ServiceNode
    composite: bool
    children: list["ServiceShape"] = field(default_factory=list)


@dataclass
class ImportPlan:
    imports: list[ImportStatement]
    entries: list[ServiceEntry]


def describe_structure(services: list[ServiceNode]) -> list[ServiceShape]:
    return [_describe(node) for node in services]


def _describe(node: ServiceNode) -> ServiceShape:
    if is_leaf(node):
        return ServiceShape(node=node, composite=False)
    return ServiceShape(
        node=node,
        composite=True,
        children=[_describe(child) for child in node.children],
    )


def plan_imports(shape: ServiceShape) -> ImportPlan:
    """One import and one composition entry per direct child."""
    imports = [ImportStatement(child.node.binding) for child in shape.children]
    entries = [
        ServiceEntry(name=child.node.name, local=statement.local)
        for child, statement in zip(shape.children, imports)
    ]
    return ImportPlan(imports=imports, entries=entries)


def resolve_imports(services: list[ServiceNode], base_import: str) -> None:
    """Fill the ``imports`` and ``services`` slots of every module."""
    for shape in describe_structure(services):
        _resolve_composite(shape, base_import)

    for node in iter_nodes(services):
        if not node.module.resolved:
            node.module.resolve([base_import], [])


def _resolve_composite(shape: ServiceShape, base_import: str) -> None:
    if not shape.composite:
        return

    plan = plan_imports(shape)
    logger.debug("%s imports %s", shape.node.binding, [i.binding for i in plan.imports])
    shape.node.module.resolve(
        [base_import, *(statement.render() for statement in plan.imports)],
        [entry.render() for entry in plan.entries],
    )
    for child in shape.children:
        _resolve_composite(child, base_import)


def write_modules(services: list[ServiceNode]) -> list[Path]:
    """Render every module to its ``index.js``."""
    written = []
    for node in iter_nodes(services):
        node.index_path.write_text(node.module.render(), encoding="utf-8")
        written.append(node.index_path)
    return written
