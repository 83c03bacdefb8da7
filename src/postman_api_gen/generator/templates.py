"""Template types for generated JavaScript.

:class:`OperationTemplate` renders one request as an async member of a
service factory. :class:`ServiceModule` is a whole ``index.js`` with two named
slots, ``imports`` and ``services``, that stay open until the resolver knows
the module's place in the tree.
"""

from dataclasses import dataclass, field

from postman_api_gen.exceptions import TemplateSlotError
from postman_api_gen.parser.names import is_identifier

# axios methods whose second positional argument is the request body
DATA_METHODS = {"post", "put", "patch"}


def js_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


@dataclass
class OperationParam:
    """One parameter of a generated function."""

    key: str  # name in the request payload
    binding: str  # name of the function parameter, escaped when reserved
    doc_type: str
    required: bool

    @property
    def signature(self) -> str:
        return self.binding if self.required else f"{self.binding} = undefined"

    @property
    def payload_entry(self) -> str:
        if self.key == self.binding:
            return self.key
        key = self.key if is_identifier(self.key) else js_string(self.key)
        return f"{key}: {self.binding}"


@dataclass
class OperationTemplate:
    """Generated function body for one request, rendered under a given name."""

    method: str
    endpoint: str
    params: list[OperationParam] = field(default_factory=list)
    payload: str = "none"  # none / form / query

    def render(self, name: str) -> str:
        lines = []
        if self.params:
            lines.append("/**")
            lines.extend(f" * @param {{{p.doc_type}}} {p.binding}" for p in self.params)
            lines.append(" */")

        signature = ", ".join(p.signature for p in self.params)
        lines.append(f"{js_string(name)}: async ({signature}) => {{")
        lines.append(f"  const endpoint = {js_string(self.endpoint)};")
        lines.append(f"  const response = await axios.{self.method}({self._call_args()});")
        lines.append("  return response.data;")
        lines.append("},")
        return "\n".join(lines)

    def _call_args(self) -> str:
        args = ["`${apiPath}/${endpoint}`"]
        fields = ", ".join(p.payload_entry for p in self.params)

        if self.payload == "form":
            if self.method in DATA_METHODS:
                args.append(f"{{ {fields} }}")
            else:
                args.append(f"{{ data: {{ {fields} }} }}")
        elif self.payload == "query":
            if self.method in DATA_METHODS:
                args.append("undefined")
            args.append(f"{{ params: {{ {fields} }} }}")
        return ", ".join(args)


@dataclass
class ImportStatement:
    """Import of a child service module into its parent."""

    binding: str

    @property
    def local(self) -> str:
        return f"{self.binding}Service"

    def render(self) -> str:
        return f"import {{ {self.binding} as {self.local} }} from './{self.binding}';"


@dataclass
class ServiceEntry:
    """A sub-service member of the parent's factory object."""

    name: str
    local: str

    def render(self) -> str:
        return f"{self.name}: {self.local}(apiPath),"


class ServiceModule:
    """An ``index.js`` service module with ``imports`` and ``services`` slots.

    Both slots are filled in one :meth:`resolve` call. Resolving twice, or
    rendering before resolving, raises :class:`TemplateSlotError`.
    """

    def __init__(self, binding: str, operations: list[str]):
        self.binding = binding
        self.operations = operations
        self._imports: list[str] | None = None
        self._services: list[str] | None = None

    @property
    def resolved(self) -> bool:
        return self._imports is not None and self._services is not None

    def resolve(self, imports: list[str], services: list[str]) -> None:
        if self._imports is not None or self._services is not None:
            raise TemplateSlotError(f"Module '{self.binding}' is already resolved")
        self._imports = list(imports)
        self._services = list(services)

    def render(self) -> str:
        if not self.resolved:
            raise TemplateSlotError(f"Module '{self.binding}' has unresolved slots")

        lines = [*self._imports, ""]
        lines.append(f"export const {self.binding} = (apiPath = '') => ({{")
        lines.extend(f"  {entry}" for entry in self._services)
        for operation in self.operations:
            lines.extend(f"  {line}" for line in operation.splitlines())
        lines.append("});")
        return "\n".join(lines) + "\n"
