from typing import Any, Protocol, Sequence, runtime_checkable

from label_maker.annotation.domain.roles import ElementRole

Node = Any


@runtime_checkable
class DocumentTreePort(Protocol):
    def find_all(self, role: ElementRole) -> Sequence[Node]: ...
    """All elements with the given role, in document order."""

    def nearest_ancestor(self, node: Node, roles: Sequence[ElementRole]) -> Node | None: ...
    """First of node itself or its ancestors matching any of roles."""

    def contains(self, container: Node, role: ElementRole) -> bool: ...
    """Whether a descendant of container has the role. Structural test only."""

    def text_of(self, node: Node) -> str | None: ...
    """Raw text content of node, or None when it cannot be read."""

    def flag(self, node: Node, display_name: str, href: str) -> None: ...
    """Replace node content with the display name and a linked CTE marker."""
