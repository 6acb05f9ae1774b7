"""Enumerations, result codes and record sub-models for pedigree nodes."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    """Gender of a pedigree node."""

    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "U"


class LifeStatus(str, Enum):
    """Life status of a person; everything but alive/deceased is a fetus state."""

    ALIVE = "alive"
    DECEASED = "deceased"
    STILLBORN = "stillborn"
    UNBORN = "unborn"
    ABORTED = "aborted"
    MISCARRIAGE = "miscarriage"


FETUS_STATUSES = frozenset(
    {
        LifeStatus.STILLBORN.value,
        LifeStatus.UNBORN.value,
        LifeStatus.ABORTED.value,
        LifeStatus.MISCARRIAGE.value,
    }
)


class CarrierStatus(str, Enum):
    """Global disorder carrier status of a person."""

    NONE = ""
    CARRIER = "carrier"
    UNCERTAIN = "uncertain"
    AFFECTED = "affected"
    PRESYMPTOMATIC = "presymptomatic"


class ChildlessStatus(str, Enum):
    """Explicit childless annotation; ``none`` is stored as ``None``."""

    NONE = "none"
    CHILDLESS = "childless"
    INFERTILE = "infertile"


class AdoptedStatus(str, Enum):
    NOT_ADOPTED = ""
    ADOPTED_IN = "adoptedIn"
    ADOPTED_OUT = "adoptedOut"


class GeneStatus(str, Enum):
    """Known gene statuses; other strings are accepted as-is."""

    CANDIDATE = "candidate"
    SOLVED = "solved"
    REJECTED = "rejected"
    CARRIER = "carrier"
    REJECTED_CANDIDATE = "rejected_candidate"


# Placeholder disorder meaning "affected by an unspecified disorder"
AFFECTED_DISORDER = "affected"


class Outcome(str, Enum):
    """Result of a mutation on a person or a legend."""

    APPLIED = "applied"
    ALREADY_PRESENT = "already_present"  # redundant add, no-op
    NOT_PRESENT = "not_present"  # redundant remove, no-op
    REJECTED = "rejected"  # validation failure, prior state kept

    @property
    def changed(self) -> bool:
        return self is Outcome.APPLIED


def is_valid(enum_cls: type[Enum], value: object) -> bool:
    """Check whether ``value`` is one of the values of ``enum_cls``."""
    return any(value == member.value for member in enum_cls)


class GeneRecord(BaseModel):
    """One gene entry of an external record: ``{gene, status, ...extra}``."""

    model_config = ConfigDict(extra="allow")

    gene: str = Field(min_length=1)
    status: str = GeneStatus.CANDIDATE.value


class CancerDetails(BaseModel):
    """Details of one common cancer attached to a person."""

    model_config = ConfigDict(extra="allow")

    affected: bool = False
    ageAtDiagnosis: str | int | None = None  # noqa: N815 - external record key
    numericAgeAtDiagnosis: int | float | None = None  # noqa: N815 - external record key
    comments: str | None = None
