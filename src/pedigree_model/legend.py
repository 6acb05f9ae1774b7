"""Shared legend registries.

A legend maps a clinical item (disorder id, gene name, HPO term id, cancer
name) to the set of pedigree nodes currently referencing it. It works like a
reference count: every ``add_case`` for an (item, node) pair is eventually
paired with a ``remove_case`` for the same pair, and the item disappears from
the legend when its last case is removed.
"""
from __future__ import annotations

from collections.abc import Hashable, Iterable

import structlog
from pydantic import BaseModel

from pedigree_model.config import CONFIG, PedigreeConfig
from pedigree_model.models import Outcome

logger = structlog.get_logger(__name__)


class LegendItem(BaseModel):
    """An item that can be shown in a legend: an id and a display name."""

    id: str | int
    name: str

    def __str__(self) -> str:
        return self.name


class Legend:
    """Registry of ``item-key -> node ids`` for one category."""

    def __init__(self, category: str):
        self.category = category
        self._cases: dict[str | int, set[Hashable]] = {}
        # Display names outlive the cases so a re-added item keeps its name.
        self._names: dict[str | int, str] = {}

    def get_item(self, item_key: str | int) -> LegendItem:
        """Return the legend item for ``item_key``, named if the name is known."""
        return LegendItem(id=item_key, name=self.get_name(item_key))

    def get_name(self, item_key: str | int) -> str:
        return self._names.get(item_key, str(item_key))

    def set_name(self, item_key: str | int, name: str) -> None:
        self._names[item_key] = name

    def add_case(self, item_key: str | int, name: str | None, node_id: Hashable) -> Outcome:
        """Register ``node_id`` as referencing ``item_key``."""
        if name:
            self._names[item_key] = name
        else:
            self._names.setdefault(item_key, str(item_key))

        nodes = self._cases.setdefault(item_key, set())
        if node_id in nodes:
            return Outcome.ALREADY_PRESENT
        nodes.add(node_id)
        logger.debug("legend.add_case", category=self.category, item=item_key, node=node_id)
        return Outcome.APPLIED

    def remove_case(self, item_key: str | int, node_id: Hashable) -> Outcome:
        """Drop ``node_id`` from ``item_key``; drop the key with its last case."""
        nodes = self._cases.get(item_key)
        if not nodes or node_id not in nodes:
            logger.warning(
                "legend.remove_missing", category=self.category, item=item_key, node=node_id
            )
            return Outcome.NOT_PRESENT
        nodes.discard(node_id)
        if not nodes:
            del self._cases[item_key]
        logger.debug("legend.remove_case", category=self.category, item=item_key, node=node_id)
        return Outcome.APPLIED

    def has_reference(self, item_key: str | int) -> bool:
        return item_key in self._cases

    def get_cases(self, item_key: str | int) -> frozenset[Hashable]:
        return frozenset(self._cases.get(item_key, ()))

    def items(self) -> list[str | int]:
        """Referenced item keys in first-registration order."""
        return list(self._cases)

    def __contains__(self, item_key: object) -> bool:
        return item_key in self._cases

    def __len__(self) -> int:
        return len(self._cases)

    def __repr__(self) -> str:
        return f"Legend({self.category!r}, items={len(self._cases)})"


class Legends:
    """One legend per category: disorders, HPO terms, cancers and gene statuses."""

    def __init__(
        self,
        gene_statuses: Iterable[str] | None = None,
        config: PedigreeConfig | None = None,
    ):
        config = config or CONFIG
        statuses = config.gene_legend_statuses if gene_statuses is None else gene_statuses
        self.disorders = Legend("disorders")
        self.hpo = Legend("hpo")
        self.cancers = Legend("cancers")
        self.genes: dict[str, Legend] = {
            status: Legend(f"genes:{status}") for status in statuses
        }

    def gene_legend(self, status: str) -> Legend | None:
        """Legend for genes of ``status``; some statuses have none."""
        return self.genes.get(status)

    def all(self) -> list[Legend]:
        return [self.disorders, self.hpo, self.cancers, *self.genes.values()]

    def references_node(self, node_id: Hashable) -> bool:
        """Check whether any legend still holds a case for ``node_id``."""
        return any(
            node_id in legend.get_cases(item) for legend in self.all() for item in legend.items()
        )
