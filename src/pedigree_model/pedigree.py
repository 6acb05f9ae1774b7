"""A pedigree: person nodes sharing one context.

Records exchanged with the outside world are lists of node entries::

    [{"id": 0, "properties": {"gender": "F", "fName": "Jane"}},
     {"id": 1, "properties": {"gender": "M", "twinGroup": 1}}]
"""
from __future__ import annotations

from collections.abc import Hashable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog
from pydantic import BaseModel, Field, ValidationError

from pedigree_model.context import PedigreeContext
from pedigree_model.exceptions import DuplicateNode, MalformedRecord, PedigreeModelError
from pedigree_model.graph import StaticGraph
from pedigree_model.legend import Legends
from pedigree_model.models import Outcome
from pedigree_model.node import check_node_id
from pedigree_model.person import Person

logger = structlog.get_logger(__name__)


class NodeEntry(BaseModel):
    """One entry of a pedigree record list."""

    id: str | int
    properties: dict[str, Any] = Field(default_factory=dict)


@dataclass
class RecordGraph(StaticGraph):
    """A ``StaticGraph`` that reads genders and twins from live person nodes.

    Relationship data is not part of person records, so only what the nodes
    themselves carry is answered from them.
    """

    persons: dict[Hashable, Person] = field(default_factory=dict)

    def get_gender(self, node_id: Hashable) -> str:
        person = self.persons.get(node_id)
        if person is not None:
            return person.get_gender()
        return super().get_gender(node_id)

    def get_all_twins_sorted_by_order(self, node_id: Hashable) -> list[Hashable]:
        person = self.persons.get(node_id)
        if person is None or person.get_twin_group() is None or self.twin_groups:
            return super().get_all_twins_sorted_by_order(node_id)
        group = person.get_twin_group()
        return [pid for pid, other in self.persons.items() if other.get_twin_group() == group]


class Pedigree:
    """Person nodes by id, all registered with the legends of one context."""

    def __init__(self, context: PedigreeContext | None = None):
        self._persons: dict[Hashable, Person] = {}
        self.context = context or PedigreeContext(graph=RecordGraph(persons=self._persons))

    @property
    def legends(self) -> Legends:
        return self.context.legends

    def add_person(
        self, node_id: Hashable, properties: Mapping[str, Any] | None = None
    ) -> Person:
        check_node_id(node_id)
        if node_id in self._persons:
            raise DuplicateNode(node_id)
        person = Person(node_id, properties, context=self.context)
        self._persons[node_id] = person
        logger.debug("pedigree.person_added", node=node_id)
        return person

    def get_person(self, node_id: Hashable) -> Person | None:
        return self._persons.get(node_id)

    def remove_person(self, node_id: Hashable) -> Outcome:
        person = self._persons.pop(node_id, None)
        if person is None:
            logger.warning("pedigree.person_not_present", node=node_id)
            return Outcome.NOT_PRESENT
        person.remove()
        return Outcome.APPLIED

    def clear(self) -> None:
        for node_id in list(self._persons):
            self.remove_person(node_id)

    def to_records(self) -> list[dict[str, Any]]:
        return [
            {"id": node_id, "properties": person.get_properties()}
            for node_id, person in self._persons.items()
        ]

    def load_records(self, records: Any) -> int:
        """Replace the pedigree content with ``records``.

        The list shape and the node ids are checked before any node is
        touched. A node record that fails to load leaves the pedigree empty.

        Returns:
            Number of nodes loaded.
        """
        if not isinstance(records, list):
            raise MalformedRecord(f"records must be a list, got {type(records).__name__}")

        entries: list[NodeEntry] = []
        seen: set[Hashable] = set()
        for index, raw in enumerate(records):
            if not isinstance(raw, Mapping):
                raise MalformedRecord(f"entry {index} must be an object")
            check_node_id(raw.get("id"))
            try:
                entry = NodeEntry.model_validate(raw)
            except ValidationError as e:
                raise MalformedRecord(
                    f"entry {index}: {e.errors()[0]['msg']}", field=str(e.errors()[0]["loc"][0])
                ) from e
            if entry.id in seen:
                raise DuplicateNode(entry.id)
            seen.add(entry.id)
            entries.append(entry)

        self.clear()
        try:
            for entry in entries:
                self.add_person(entry.id, entry.properties)
        except PedigreeModelError:
            self.clear()
            raise
        logger.debug("pedigree.loaded", nodes=len(entries))
        return len(entries)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._persons

    def __iter__(self) -> Iterator[Person]:
        return iter(list(self._persons.values()))

    def __len__(self) -> int:
        return len(self._persons)
