"""Tree materializer: lays the canonical tree out as service directories.

Every folder becomes a directory with one index module holding the folder's
direct operations. Operations sitting at the collection root are grouped
under a synthetic ``rootRequests`` service.
"""

import logging
from pathlib import Path

from postman_api_gen.parser.names import public_name
from postman_api_gen.generator.normalizer import CanonicalTree
from postman_api_gen.generator.templates import OperationTemplate, ServiceModule
from postman_api_gen.generator.tree import ServiceNode

logger = logging.getLogger(__name__)

ROOT_REQUESTS = "rootRequests"


def materialize(tree: CanonicalTree, services_dir: Path) -> list[ServiceNode]:
    """Create the service directories under ``services_dir``.

    Returns the top-level services; module slots are left open for the
    resolver.
    """
    folders = {k: v for k, v in tree.items() if isinstance(v, dict)}
    root_operations = {k: v for k, v in tree.items() if isinstance(v, OperationTemplate)}

    services = [
        _materialize_service(key, subtree, services_dir)
        for key, subtree in folders.items()
    ]
    if root_operations:
        logger.debug("Grouping %d root requests under %s", len(root_operations), ROOT_REQUESTS)
        services.append(_materialize_service(ROOT_REQUESTS, root_operations, services_dir))
    return services


def _materialize_service(key: str, subtree: CanonicalTree, parent_dir: Path) -> ServiceNode:
    directory = parent_dir / key
    directory.mkdir()

    operations: list[str] = []
    children: list[ServiceNode] = []
    for name, value in subtree.items():
        if isinstance(value, OperationTemplate):
            operations.append(value.render(public_name(name)))
        else:
            children.append(_materialize_service(name, value, directory))

    logger.debug("Materialized %s: %d operations, %d sub-services", directory, len(operations), len(children))
    return ServiceNode(
        binding=key,
        directory=directory,
        module=ServiceModule(key, operations),
        children=children,
    )
