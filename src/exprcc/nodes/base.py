"""Base node class for the exprcc AST."""

from __future__ import annotations

from dataclasses import dataclass, field

from exprcc._types import Location


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track the source location of the token that produced them.
    Nodes are immutable; a child is referenced only by its parent.

    """

    location: Location = field(
        default_factory=Location, compare=False, repr=False, kw_only=True
    )
