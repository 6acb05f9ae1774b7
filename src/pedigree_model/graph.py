"""Read-only pedigree graph queries used by person nodes."""
from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

GENDERS = ("M", "F", "U")


@runtime_checkable
class PedigreeGraph(Protocol):
    """Queries a person node may ask about its place in the pedigree."""

    def has_relationships(self, node_id: Hashable) -> bool:
        """True if the node is a partner in at least one relationship."""
        ...

    def get_possible_genders(self, node_id: Hashable) -> dict[str, bool]:
        """Map of gender -> whether the node may take that gender."""
        ...

    def is_related_to_proband(self, node_id: Hashable) -> bool: ...

    def get_all_twins_sorted_by_order(self, node_id: Hashable) -> list[Hashable]:
        """All twins of the node (the node included), in birth order."""
        ...

    def get_gender(self, node_id: Hashable) -> str: ...

    def has_to_be_adopted(self, node_id: Hashable) -> bool: ...


@dataclass
class StaticGraph:
    """A ``PedigreeGraph`` answering from plain data.

    Useful for pedigrees loaded from records, where the layout engine is not
    present, and for tests.
    """

    with_relationships: set[Hashable] = field(default_factory=set)
    related_to_proband: set[Hashable] = field(default_factory=set)
    must_be_adopted: set[Hashable] = field(default_factory=set)
    # node id -> genders the node may NOT take
    impossible_genders: dict[Hashable, set[str]] = field(default_factory=dict)
    # twin group members in birth order
    twin_groups: list[list[Hashable]] = field(default_factory=list)
    genders: dict[Hashable, str] = field(default_factory=dict)

    def has_relationships(self, node_id: Hashable) -> bool:
        return node_id in self.with_relationships

    def get_possible_genders(self, node_id: Hashable) -> dict[str, bool]:
        blocked = self.impossible_genders.get(node_id, set())
        return {gender: gender not in blocked for gender in GENDERS}

    def is_related_to_proband(self, node_id: Hashable) -> bool:
        return node_id == 0 or node_id in self.related_to_proband

    def get_all_twins_sorted_by_order(self, node_id: Hashable) -> list[Hashable]:
        for group in self.twin_groups:
            if node_id in group:
                return list(group)
        return [node_id]

    def get_gender(self, node_id: Hashable) -> str:
        return self.genders.get(node_id, "U")

    def has_to_be_adopted(self, node_id: Hashable) -> bool:
        return node_id in self.must_be_adopted
