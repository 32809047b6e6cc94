"""Route tree with typed variable segments.

Patterns are registered during setup and the tree is frozen when the
app starts serving. Nodes live in a flat arena and refer to their
children by index.

Lookup walks one segment at a time. A literal child always wins over
the variable child; a variable child is only taken when its kind
validator accepts the segment. There is a single candidate per level:
if the chosen branch fails further down, the lookup fails, with no
backtracking into siblings.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from rip.errors import AmbiguousRegistration, ConfigurationError, RouteNotFound, UnregisteredVariableKind
from rip.resource import Resource
from rip.routing.endpoint import Endpoint
from rip.routing.route import PathSegment, RouteMatch, parse_pattern, split_path
from rip.routing.types import VariableTypeRegistry

ROOT = 0


@dataclass(slots=True)
class _VariableEdge:
    """The single variable child of a node."""

    name: str
    kind: str
    node: int


class _RouteNode:
    """A node in the route tree. Mutable during registration only."""

    __slots__ = ("children", "endpoint", "label", "variable")

    def __init__(self, label: str) -> None:
        self.label = label
        # Literal segment children: "users" -> node index
        self.children: dict[str, int] = {}
        self.variable: _VariableEdge | None = None
        self.endpoint: Endpoint | None = None


class Router:
    """Route tree with typed variable segments.

    Usage::

        router = Router()
        router.register("/items", [ListItems])
        router.register("/items/{id:int}", [GetItem, ReplaceItem])
        router.compile()
        match = router.find("/items/42")
        # match.endpoint.pattern == "/items/{id:int}", match.variables == {"id": "42"}
    """

    __slots__ = ("_compiled", "_endpoints", "_nodes", "types")

    def __init__(self, types: VariableTypeRegistry | None = None) -> None:
        self.types = types if types is not None else VariableTypeRegistry()
        self._nodes: list[_RouteNode] = [_RouteNode("/")]
        self._endpoints: list[Endpoint] = []
        self._compiled = False

    # -- Registration --

    def register(self, pattern: str, resources: Iterable[type[Resource]]) -> Endpoint:
        """Register *resources* under *pattern* and return the new Endpoint.

        Raises:
            MalformedPattern: The pattern breaks the segment grammar.
            UnregisteredVariableKind: A variable kind is unknown.
            AmbiguousRegistration: The pattern is already registered, or
                a variable segment disagrees with an earlier pattern at
                the same tree position.
            ConfigurationError: No resources, or an invalid resource.
        """
        if self._compiled:
            msg = "Cannot register endpoints after compilation."
            raise RuntimeError(msg)

        segments = parse_pattern(pattern)
        for seg in segments:
            if seg.is_variable and seg.kind not in self.types:
                msg = f"Route pattern {pattern!r} uses unregistered variable kind {seg.kind!r}"
                raise UnregisteredVariableKind(msg)

        resources = tuple(resources)
        if not resources:
            msg = f"Endpoint {pattern!r} must have at least one resource"
            raise ConfigurationError(msg)
        endpoint = Endpoint(pattern, resources)

        # Check every conflict before creating nodes, so a rejected
        # pattern leaves the tree untouched.
        index: int | None = ROOT
        for seg in segments:
            index = self._descend(index, seg, pattern, create=False)
            if index is None:
                break
        if index is not None and self._nodes[index].endpoint is not None:
            msg = f"Route pattern {pattern!r} is already registered"
            raise AmbiguousRegistration(msg)

        index = ROOT
        for seg in segments:
            index = self._descend(index, seg, pattern, create=True)
        self._nodes[index].endpoint = endpoint
        self._endpoints.append(endpoint)

        return endpoint

    def _descend(self, index: int, seg: PathSegment, pattern: str, *, create: bool) -> int | None:
        node = self._nodes[index]

        if not seg.is_variable:
            child = node.children.get(seg.value)
            if child is None and create:
                child = self._new_node(seg.value)
                node.children[seg.value] = child
            return child

        edge = node.variable
        if edge is None:
            if not create:
                return None
            edge = _VariableEdge(name=seg.name or "", kind=seg.kind or "", node=self._new_node(str(seg)))
            node.variable = edge
            return edge.node

        if edge.kind != seg.kind or edge.name != seg.name:
            msg = (
                f"Route pattern {pattern!r}: variable {seg} conflicts with "
                f"{{{edge.name}:{edge.kind}}} registered at the same position"
            )
            raise AmbiguousRegistration(msg)
        return edge.node

    def _new_node(self, label: str) -> int:
        self._nodes.append(_RouteNode(label))
        return len(self._nodes) - 1

    def compile(self) -> None:
        """Freeze the router. No more endpoints can be registered."""
        self._compiled = True

    # -- Lookup --

    def find(self, path: str) -> RouteMatch:
        """Resolve a concrete request path.

        Returns a ``RouteMatch`` whose ``endpoint`` may be ``None`` when
        the path stops on an intermediate node.
        Raises ``MalformedPath`` for empty segments or trailing slashes.
        Raises ``RouteNotFound`` when no branch accepts a segment.
        """
        variables: dict[str, str] = {}
        index = ROOT

        for part in split_path(path):
            node = self._nodes[index]

            # 1. Literal child first
            child = node.children.get(part)
            if child is not None:
                index = child
                continue

            # 2. Variable child, validated by its kind
            edge = node.variable
            if edge is None:
                raise RouteNotFound(f"Could not find route for {path}")
            if not self.types.is_valid(edge.kind, part):
                raise RouteNotFound(
                    f"Could not find route for {path}: {part!r} is not a valid {edge.kind}"
                )
            variables[edge.name] = part
            index = edge.node

        return RouteMatch(endpoint=self._nodes[index].endpoint, variables=variables)

    # -- Introspection --

    @property
    def endpoints(self) -> list[Endpoint]:
        """All registered endpoints, in registration order."""
        return list(self._endpoints)

    def format_tree(self) -> str:
        """Render the route tree, one node per line, indented by depth."""
        lines: list[str] = []
        self._format_node(ROOT, 0, lines)
        return "\n".join(lines)

    def _format_node(self, index: int, depth: int, lines: list[str]) -> None:
        node = self._nodes[index]
        line = "  " * depth + node.label
        if node.endpoint is not None:
            handlers = ", ".join(f"{r.method} {r.__name__}" for r in node.endpoint.resources)
            line = f"{line}  [{handlers}]"
        lines.append(line)

        for child in node.children.values():
            self._format_node(child, depth + 1, lines)
        if node.variable is not None:
            self._format_node(node.variable.node, depth + 1, lines)
