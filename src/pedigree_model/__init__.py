"""Pedigree Model - clinical data model of pedigree nodes.

Person nodes with dates, life status, disorders, genes, HPO terms and
cancers, kept consistent with shared legend registries and exchanged as
sparse property records.
"""

__version__ = "0.1.0"

from .context import PedigreeContext
from .dates import PedigreeDate
from .exceptions import DuplicateNode, InvalidNodeId, MalformedRecord, PedigreeModelError
from .legend import Legend, LegendItem, Legends
from .logging import configure_logging, get_logger
from .models import CarrierStatus, Gender, GeneStatus, LifeStatus, Outcome
from .pedigree import Pedigree
from .person import Person

__all__ = [
    "Person",
    "Pedigree",
    "PedigreeContext",
    "PedigreeDate",
    "Legend",
    "LegendItem",
    "Legends",
    "Outcome",
    "Gender",
    "LifeStatus",
    "CarrierStatus",
    "GeneStatus",
    "PedigreeModelError",
    "InvalidNodeId",
    "MalformedRecord",
    "DuplicateNode",
    "configure_logging",
    "get_logger",
]
