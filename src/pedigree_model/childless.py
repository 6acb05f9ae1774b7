"""Childless annotation capability."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from pedigree_model.models import ChildlessStatus, Outcome


def normalize_childless_status(status: str | None) -> str | None:
    """Map input to ``childless``/``infertile``; anything else means no status."""
    if status in (ChildlessStatus.CHILDLESS.value, ChildlessStatus.INFERTILE.value):
        return ChildlessStatus(status).value
    return None


@runtime_checkable
class ChildlessCapable(Protocol):
    """A node that can be marked childless or infertile, with a reason."""

    def get_childless_status(self) -> str | None: ...

    def set_childless_status(self, status: str | None) -> str | None: ...

    def get_childless_reason(self) -> str | None: ...

    def set_childless_reason(self, reason: str | None) -> Outcome: ...
