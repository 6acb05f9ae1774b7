"""Dependencies shared by all person nodes of one pedigree."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from pedigree_model.config import CONFIG, PedigreeConfig
from pedigree_model.extensions import ExtensionManager
from pedigree_model.graph import PedigreeGraph, StaticGraph
from pedigree_model.graphics import NodeGraphics, NullGraphics
from pedigree_model.legend import Legends

if TYPE_CHECKING:
    from pedigree_model.person import Person


def _null_graphics(person: Person) -> NodeGraphics:
    return NullGraphics()


@dataclass
class PedigreeContext:
    """Everything a person node collaborates with.

    One context is shared by every node of a pedigree, so all of them register
    with the same legends and answer to the same graph.
    """

    config: PedigreeConfig = CONFIG
    legends: Legends | None = None
    graph: PedigreeGraph = field(default_factory=StaticGraph)
    extensions: ExtensionManager = field(default_factory=ExtensionManager)
    graphics_factory: Callable[[Person], NodeGraphics] = _null_graphics
    clock: Callable[[], date] = date.today

    def __post_init__(self) -> None:
        if self.legends is None:
            self.legends = Legends(config=self.config)

    def today(self) -> date:
        return self.clock()
