from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class PedigreeModelError(Exception):
    """Base class for hard errors raised by the pedigree model.

    Validation problems on individual fields never raise; they are reported
    through :class:`pedigree_model.models.Outcome` instead.
    """


@dataclass
class InvalidNodeId(PedigreeModelError):
    """Raised when a person node is created with an unusable identifier."""

    node_id: Any

    def __str__(self) -> str:
        return f"Invalid node id: {self.node_id!r}"


@dataclass
class DuplicateNode(PedigreeModelError):
    """Raised when a pedigree already holds a node with the same id."""

    node_id: Any

    def __str__(self) -> str:
        return f"Node {self.node_id!r} already exists in the pedigree"


@dataclass
class MalformedRecord(PedigreeModelError):
    """Raised when an external property record is structurally broken.

    ``field`` names the record key at fault when one can be identified.
    """

    reason: str
    field: str | None = None

    def __str__(self) -> str:
        if self.field:
            return f"{self.reason} (field={self.field})"
        return self.reason
