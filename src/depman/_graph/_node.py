"""Node record stored in a dependency graph's arena."""

from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)


@dataclass(slots=True, eq=False)
class DependencyNode(Generic[T]):
    """One element of a dependency graph and its relations.

    Relations are stored as arena indices, not node references. Both dicts
    are used as insertion-ordered sets (values are always ``None``).

    Attributes:
        element: The wrapped user element.
        depends_on: Indices of nodes that must be processed before this one.
        depended_upon: Indices of nodes that must be processed after this one.

    """

    element: T
    depends_on: dict[int, None] = field(default_factory=dict)
    depended_upon: dict[int, None] = field(default_factory=dict)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyNode):
            return NotImplemented
        return self.element == other.element

    def __hash__(self) -> int:
        """Hash based on the wrapped element."""
        return hash(self.element)
