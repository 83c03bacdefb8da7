"""Collection normalizer: builds the canonical operation tree.

The canonical tree is a plain dict keyed by sanitized names. Folder values are
nested dicts, request values are :class:`OperationTemplate` objects. Requests
without a method or a path produce nothing.
"""

import logging
import re

from postman_api_gen.parser.base import CollectionItem, Request, RequestField
from postman_api_gen.parser.names import escape_reserved, is_identifier, sanitize_name
from postman_api_gen.generator.templates import OperationParam, OperationTemplate

logger = logging.getLogger(__name__)

CanonicalTree = dict  # str -> CanonicalTree | OperationTemplate

REQUIRED_RE = re.compile(r"required", re.IGNORECASE)
NUMBER_RE = re.compile(r"\b(?:int|integer|float)\b", re.IGNORECASE)
STRING_RE = re.compile(r"\bstring\b", re.IGNORECASE)
ARRAY_SUFFIX_RE = re.compile(r"\[.*\]")


def normalize(item: CollectionItem) -> CanonicalTree | OperationTemplate | None:
    """Normalize a raw node: folders become dicts, usable requests templates."""
    if item.is_folder:
        tree: CanonicalTree = {}
        for child in item.item:
            node = normalize(child)
            if node is None:
                logger.debug("Skipping %r: no method or path", child.name)
                continue
            # Sibling collisions: last one wins.
            tree[sanitize_name(child.name)] = node
        return tree

    if item.request is not None:
        return build_operation(item.request)
    return None


def build_operation(request: Request) -> OperationTemplate | None:
    url = request.url_object
    if not request.method or url is None or not url.path:
        return None

    operation = OperationTemplate(
        method=request.method.lower(),
        endpoint="/".join(url.path),
    )

    formdata = request.body.formdata if request.body else []
    if formdata:
        operation.params = form_params(formdata)
        operation.payload = "form"
    elif url.query:
        operation.params = query_params(url.query)
        operation.payload = "query"

    if not operation.params:
        operation.payload = "none"
    return operation


def is_required(description: str) -> bool:
    return bool(REQUIRED_RE.search(description))


def doc_type(description: str, is_array: bool = False) -> str:
    if is_array:
        return "string[]"
    if NUMBER_RE.search(description):
        return "number"
    if STRING_RE.search(description):
        return "string"
    return "any"


def param_binding(key: str) -> str:
    """Function parameter name for a payload key.

    Identifier keys are only escaped; anything else (``user-id``,
    ``filter[status]``) is sanitized like a collection name first.
    """
    if is_identifier(key):
        return escape_reserved(key)
    return sanitize_name(key)


def _param(key: str, type_: str, required: bool, seen: set[str]) -> OperationParam | None:
    binding = param_binding(key)
    if not binding or binding in seen:
        logger.debug("Skipping field %r: no usable or unique binding", key)
        return None
    seen.add(binding)
    return OperationParam(key=key, binding=binding, doc_type=type_, required=required)


def form_params(fields: list[RequestField]) -> list[OperationParam]:
    """Form fields as function parameters, required ones first.

    ``tags[]``, ``tags[0]``, ``tags[1]`` collapse into one ``tags`` parameter
    taken from the first occurrence. Later fields whose binding is already
    taken are skipped.
    """
    ordered = sorted(fields, key=lambda f: not is_required(f.description))

    params = []
    seen: set[str] = set()
    for f in ordered:
        is_array = bool(ARRAY_SUFFIX_RE.search(f.key))
        key = ARRAY_SUFFIX_RE.sub("", f.key)
        param = _param(key, doc_type(f.description, is_array), is_required(f.description), seen)
        if param is not None:
            params.append(param)
    return params


def query_params(fields: list[RequestField]) -> list[OperationParam]:
    seen: set[str] = set()
    params = [_param(f.key, "any", False, seen) for f in fields]
    return [p for p in params if p is not None]
