from __future__ import annotations

import os
from dataclasses import dataclass


def _b(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off", "")


def _t(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _level(name: str, default: str) -> str:
    raw = (os.getenv(name) or default).strip().upper()
    if raw not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        return default
    return raw


@dataclass(frozen=True)
class PedigreeConfig:
    # Gene statuses that own a legend; genes with any other status are stored
    # on the node but never registered.
    gene_legend_statuses: tuple[str, ...] = _t(
        "PEDIGREE_GENE_LEGEND_STATUSES", ("candidate", "solved")
    )

    # Upper-case the first letter of first/last names on assignment
    capitalize_names: bool = _b("PEDIGREE_CAPITALIZE_NAMES", True)

    log_level: str = _level("PEDIGREE_LOG_LEVEL", "INFO")


CONFIG = PedigreeConfig()
