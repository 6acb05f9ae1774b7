from __future__ import annotations

from datetime import date

import pytest

from pedigree_model.context import PedigreeContext
from pedigree_model.graph import StaticGraph

TODAY = date(2024, 6, 1)


class RecordingGraphics:
    """Graphics fake that records every redraw notification it receives."""

    def __init__(self, person=None):
        self.person = person
        self.calls: list[tuple[str, tuple]] = []

    def __getattr__(self, name: str):
        if name.startswith(("update_", "regenerate_")) or name == "remove":
            def record(*args):
                self.calls.append((name, args))
            return record
        raise AttributeError(name)

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture()
def graph() -> StaticGraph:
    return StaticGraph()


@pytest.fixture()
def context(graph: StaticGraph) -> PedigreeContext:
    return PedigreeContext(graph=graph, graphics_factory=RecordingGraphics, clock=lambda: TODAY)


@pytest.fixture()
def today() -> date:
    return TODAY
