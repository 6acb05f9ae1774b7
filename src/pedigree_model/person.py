"""Clinical data model of one pedigree node.

A ``Person`` owns its scalar fields and keeps four cross-referenced
collections (disorders, genes, HPO terms, cancers) in step with the shared
legends of its ``PedigreeContext``. All changes go through the methods below
so that legend bookkeeping, derived fields and redraw notifications stay
consistent.
"""
from __future__ import annotations

import copy
from collections.abc import Hashable, Iterable, Mapping
from datetime import date, datetime, timedelta
from typing import Any

import structlog

from pedigree_model import codec, menu
from pedigree_model.childless import normalize_childless_status
from pedigree_model.context import PedigreeContext
from pedigree_model.dates import PedigreeDate
from pedigree_model.extensions import ExtensionPoint
from pedigree_model.graphics import NodeGraphics
from pedigree_model.legend import LegendItem, Legends
from pedigree_model.models import (
    AFFECTED_DISORDER,
    FETUS_STATUSES,
    CarrierStatus,
    GeneStatus,
    LifeStatus,
    Outcome,
    is_valid,
)
from pedigree_model.node import NodeIdentity

logger = structlog.get_logger(__name__)


def _parse_weeks(value: Any) -> int | None:
    """Read a non-negative whole number of weeks; None for anything else."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        weeks = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        weeks = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text.isdecimal():
            return None
        weeks = int(text)
    else:
        return None
    return weeks if weeks >= 0 else None


class Person:
    """A pedigree node with enough information to be drawn and exported.

    Args:
        node_id: Unique id within the pedigree; ``0`` is the proband.
        properties: Optional external property record applied after creation.
        context: Shared legends, graph, extensions and graphics factory.
    """

    def __init__(
        self,
        node_id: Hashable,
        properties: Mapping[str, Any] | None = None,
        context: PedigreeContext | None = None,
    ):
        self._context = context or PedigreeContext()
        self._identity = NodeIdentity(node_id)
        self._is_proband = node_id == 0 and not isinstance(node_id, bool)
        self._removed = False
        self._set_default()

        if isinstance(properties, Mapping) and isinstance(properties.get("gender"), str):
            self._identity.set_gender(properties["gender"])

        # graphics need the gender in place before any property redraws
        self._graphics: NodeGraphics = self._context.graphics_factory(self)
        self._context.extensions.call(ExtensionPoint.PERSON_CREATED, {"node": self})

        if properties is not None:
            self.assign_properties(properties)

    def _set_default(self) -> None:
        self._phenotips_id = ""
        self._first_name = ""
        self._last_name = ""
        self._last_name_at_birth = ""
        self._birth_date: PedigreeDate | None = None
        self._death_date: PedigreeDate | None = None
        self._conception_date: date | None = None
        self._gestation_age: int | None = None
        self._external_id = ""
        self._life_status = LifeStatus.ALIVE.value
        self._childless_status: str | None = None
        self._childless_reason: str | None = None
        self._carrier_status = CarrierStatus.NONE.value
        self._disorders: list[str | int] = []
        self._cancers: dict[str, dict[str, Any]] = {}
        self._hpo: list[str | int] = []
        self._ethnicities: list[str] = []
        self._genes: dict[str, dict[str, Any]] = {}
        self._twin_group: Hashable | None = None
        self._monozygotic = False
        self._evaluated = False
        self._ped_number = ""
        self._lost_contact = False

    # ------------------------------------------------------------------
    # Identity and collaborators
    # ------------------------------------------------------------------

    @property
    def node_id(self) -> Hashable:
        return self._identity.node_id

    def get_id(self) -> Hashable:
        return self._identity.node_id

    @property
    def context(self) -> PedigreeContext:
        return self._context

    @property
    def legends(self) -> Legends:
        return self._context.legends

    def get_graphics(self) -> NodeGraphics:
        return self._graphics

    def is_proband(self) -> bool:
        return self._is_proband

    def is_removed(self) -> bool:
        return self._removed

    def get_gender(self) -> str:
        return self._identity.gender

    def set_gender(self, gender: str | None) -> Outcome:
        old = self._identity.gender
        if not self._identity.set_gender(gender):
            return Outcome.REJECTED
        if self._identity.gender != old:
            self._graphics.update_gender_shapes()
        return Outcome.APPLIED

    def get_adopted_status(self) -> str:
        return self._identity.adopted_status

    def set_adopted_status(self, status: str | None) -> Outcome:
        if not self._identity.set_adopted_status(status):
            return Outcome.REJECTED
        self._graphics.update_adopted_shape()
        return Outcome.APPLIED

    def get_identity_properties(self) -> dict[str, str]:
        """Record fields owned by the embedded node identity."""
        return self._identity.get_properties()

    def get_comments(self) -> str:
        return self._identity.comments

    def set_comments(self, comments: str | None) -> None:
        if self._identity.set_comments(comments):
            self._graphics.update_comments_label()

    # ------------------------------------------------------------------
    # Names and labels
    # ------------------------------------------------------------------

    def _capitalize(self, name: str | None) -> str:
        name = name or ""
        if name and self._context.config.capitalize_names:
            return name[0].upper() + name[1:]
        return name

    def get_phenotips_patient_id(self) -> str:
        return self._phenotips_id

    def set_phenotips_patient_id(self, phenotips_id: str | None) -> None:
        """Link the node to a patient record; the id is not checked."""
        self._phenotips_id = phenotips_id or ""

    def get_first_name(self) -> str:
        return self._first_name

    def set_first_name(self, first_name: str | None) -> str:
        self._first_name = self._capitalize(first_name)
        self._graphics.update_name_label()
        return self._first_name

    def get_last_name(self) -> str:
        return self._last_name

    def set_last_name(self, last_name: str | None) -> str:
        self._last_name = self._capitalize(last_name)
        self._graphics.update_name_label()
        return self._last_name

    def get_last_name_at_birth(self) -> str:
        return self._last_name_at_birth

    def set_last_name_at_birth(self, last_name_at_birth: str | None) -> str:
        self._last_name_at_birth = self._capitalize(last_name_at_birth)
        self._graphics.update_name_label()
        return self._last_name_at_birth

    def get_external_id(self) -> str:
        return self._external_id

    def set_external_id(self, external_id: str | None) -> None:
        self._external_id = external_id or ""
        self._graphics.update_external_id_label()

    def get_ped_number(self) -> str:
        """User-visible node label such as ``I-1`` or ``II-3``."""
        return self._ped_number

    def set_ped_number(self, ped_number: str | None) -> None:
        self._ped_number = ped_number or ""
        self._graphics.update_number_label()

    def get_ethnicities(self) -> list[str]:
        return list(self._ethnicities)

    def set_ethnicities(self, ethnicities: Iterable[str] | None) -> None:
        self._ethnicities = list(ethnicities or [])

    # ------------------------------------------------------------------
    # Twins, evaluation, contact
    # ------------------------------------------------------------------

    def get_twin_group(self) -> Hashable | None:
        return self._twin_group

    def set_twin_group(self, group_id: Hashable | None) -> None:
        self._twin_group = group_id

    def get_monozygotic(self) -> bool:
        return self._monozygotic

    def set_monozygotic(self, monozygotic: bool) -> None:
        self._monozygotic = bool(monozygotic)

    def get_evaluated(self) -> bool:
        return self._evaluated

    def set_evaluated(self, evaluated: bool) -> None:
        evaluated = bool(evaluated)
        if evaluated == self._evaluated:
            return
        self._evaluated = evaluated
        self._graphics.update_evaluation_label()

    def get_lost_contact(self) -> bool:
        """True when the proband has lost contact with this individual."""
        return self._lost_contact

    def set_lost_contact(self, lost_contact: bool) -> None:
        self._lost_contact = bool(lost_contact)

    # ------------------------------------------------------------------
    # Life status
    # ------------------------------------------------------------------

    def get_life_status(self) -> str:
        return self._life_status

    def is_fetus(self) -> bool:
        return self._life_status in FETUS_STATUSES

    def set_life_status(self, status: str) -> Outcome:
        """Move to ``status`` and clear the fields the new status rules out.

        Unknown labels are ignored and the current status kept.
        """
        if not is_valid(LifeStatus, status):
            logger.debug("person.life_status_rejected", node=self.node_id, status=status)
            return Outcome.REJECTED

        old_status = self._life_status
        self._life_status = LifeStatus(status).value

        if self._life_status != LifeStatus.DECEASED.value:
            self.set_death_date(None)
        if self._life_status == LifeStatus.ALIVE.value:
            self.set_gestation_age(None)
        self._graphics.update_sb_label()

        # a fetus has no birth date, adoption or children
        if self.is_fetus():
            self.set_birth_date(None)
            self.set_adopted_status("")
            self.set_childless_status(None)

        self._graphics.update_life_status_shapes(old_status)
        self._graphics.regenerate_handles()
        self._graphics.regenerate_buttons()
        return Outcome.APPLIED

    # ------------------------------------------------------------------
    # Dates and gestation
    # ------------------------------------------------------------------

    def get_birth_date(self) -> PedigreeDate | None:
        return self._birth_date.model_copy() if self._birth_date else None

    def set_birth_date(self, value: Any) -> Outcome:
        """Set the birth date; rejected when it cannot precede the death date."""
        new_date = PedigreeDate.parse(value)
        if (
            new_date is not None
            and self._death_date is not None
            and not self._death_date.can_be_after_date(new_date)
        ):
            logger.debug(
                "person.birth_date_rejected", node=self.node_id, birth=str(new_date),
                death=str(self._death_date),
            )
            return Outcome.REJECTED
        self._birth_date = new_date
        self._graphics.update_age_label()
        return Outcome.APPLIED

    def get_death_date(self) -> PedigreeDate | None:
        return self._death_date.model_copy() if self._death_date else None

    def set_death_date(self, value: Any) -> Outcome:
        """Set the death date; a living person becomes deceased."""
        new_date = PedigreeDate.parse(value)
        if (
            new_date is not None
            and self._birth_date is not None
            and not new_date.can_be_after_date(self._birth_date)
        ):
            logger.debug(
                "person.death_date_rejected", node=self.node_id, death=str(new_date),
                birth=str(self._birth_date),
            )
            return Outcome.REJECTED
        self._death_date = new_date
        if new_date is not None and self._life_status == LifeStatus.ALIVE.value:
            self.set_life_status(LifeStatus.DECEASED.value)
        self._graphics.update_age_label()
        return Outcome.APPLIED

    def get_conception_date(self) -> date | None:
        return self._conception_date

    def set_conception_date(self, conception_date: date | None) -> Outcome:
        if isinstance(conception_date, datetime):
            conception_date = conception_date.date()
        if conception_date is not None and conception_date > self._context.today():
            return Outcome.REJECTED
        self._conception_date = conception_date
        self._graphics.update_age_label()
        return Outcome.APPLIED

    def get_gestation_age(self) -> int | None:
        """Weeks since conception for fetuses; None for born persons.

        For an unborn fetus the age is computed from the conception date on
        every call.
        """
        if self._life_status == LifeStatus.UNBORN.value and self._conception_date:
            days = (self._context.today() - self._conception_date).days
            return max(0, round(days / 7))
        if self.is_fetus():
            return self._gestation_age
        return None

    def set_gestation_age(self, weeks: Any) -> Outcome:
        """Set gestation age in weeks and derive the conception date.

        Anything but a non-negative whole number clears both fields.
        """
        parsed = _parse_weeks(weeks)
        if parsed is None:
            self._gestation_age = None
            self.set_conception_date(None)
        else:
            self._gestation_age = parsed
            self.set_conception_date(self._context.today() - timedelta(weeks=parsed))
        self._graphics.update_age_label()
        return Outcome.APPLIED

    # ------------------------------------------------------------------
    # Childless
    # ------------------------------------------------------------------

    def get_childless_status(self) -> str | None:
        return self._childless_status

    def set_childless_status(self, status: str | None) -> str | None:
        """Set ``childless``/``infertile``; any other value clears the status."""
        status = normalize_childless_status(status)
        if status != self._childless_status:
            self._childless_status = status
            self.set_childless_reason(None)
            self._graphics.update_childless_shapes()
            self._graphics.regenerate_handles()
        return self._childless_status

    def get_childless_reason(self) -> str | None:
        return self._childless_reason

    def set_childless_reason(self, reason: str | None) -> Outcome:
        reason = reason or None
        if reason is not None and self._childless_status is None:
            return Outcome.REJECTED
        self._childless_reason = reason
        self._graphics.update_childless_status_label()
        return Outcome.APPLIED

    # ------------------------------------------------------------------
    # Carrier status and disorders
    # ------------------------------------------------------------------

    def get_carrier_status(self) -> str:
        return self._carrier_status

    def set_carrier_status(self, status: str | None = None) -> Outcome:
        """Set the carrier status, keeping it consistent with the disorders.

        With no status given it is inferred from the current disorders. A
        person with real disorders cannot be unaffected, and an affected
        person with no disorders gets the ``affected`` placeholder disorder.
        """
        num_disorders = len(self._disorders)

        if status is None:
            if num_disorders == 0:
                status = CarrierStatus.NONE.value
            else:
                status = self._carrier_status or CarrierStatus.AFFECTED.value

        if not is_valid(CarrierStatus, status):
            logger.debug("person.carrier_status_rejected", node=self.node_id, status=status)
            return Outcome.REJECTED
        status = CarrierStatus(status).value

        if num_disorders > 0 and status == CarrierStatus.NONE.value:
            if num_disorders == 1 and self._disorders[0] == AFFECTED_DISORDER:
                self._remove_disorder(AFFECTED_DISORDER)
                self._graphics.update_disorder_shapes()
            else:
                status = CarrierStatus.AFFECTED.value
        elif num_disorders == 0 and status == CarrierStatus.AFFECTED.value:
            self.add_disorder(AFFECTED_DISORDER)
            self._graphics.update_disorder_shapes()

        if status != self._carrier_status:
            self._carrier_status = status
            self._graphics.update_carrier_graphic()
        return Outcome.APPLIED

    def get_disorders(self) -> list[str | int]:
        return list(self._disorders)

    def has_disorder(self, disorder_id: str | int) -> bool:
        return disorder_id in self._disorders

    def add_disorder(self, disorder: str | int | LegendItem) -> Outcome:
        """Add a disorder by id or legend item and register it in the legend.

        A concrete disorder supersedes the ``affected`` placeholder.
        """
        legend = self.legends.disorders
        item = disorder if isinstance(disorder, LegendItem) else legend.get_item(disorder)

        if self.has_disorder(item.id):
            logger.warning("person.disorder_already_present", node=self.node_id, disorder=item.id)
            outcome = Outcome.ALREADY_PRESENT
        else:
            legend.add_case(item.id, item.name, self.node_id)
            self._disorders.append(item.id)
            outcome = Outcome.APPLIED

        if len(self._disorders) > 1 and self.has_disorder(AFFECTED_DISORDER):
            self._remove_disorder(AFFECTED_DISORDER)
        return outcome

    def remove_disorder(self, disorder_id: str | int) -> Outcome:
        outcome = self._remove_disorder(disorder_id)
        if outcome is Outcome.NOT_PRESENT and disorder_id != AFFECTED_DISORDER:
            logger.warning("person.disorder_not_present", node=self.node_id, disorder=disorder_id)
        return outcome

    def _remove_disorder(self, disorder_id: str | int) -> Outcome:
        if not self.has_disorder(disorder_id):
            return Outcome.NOT_PRESENT
        self.legends.disorders.remove_case(disorder_id, self.node_id)
        self._disorders.remove(disorder_id)
        return Outcome.APPLIED

    def set_disorders(self, disorders: Iterable[str | int | LegendItem]) -> None:
        """Replace all disorders, then recompute the carrier status."""
        for disorder_id in reversed(self._disorders[:]):
            self.remove_disorder(disorder_id)
        for disorder in disorders:
            self.add_disorder(disorder)
        self._graphics.update_disorder_shapes()
        self.set_carrier_status()

    # ------------------------------------------------------------------
    # HPO terms
    # ------------------------------------------------------------------

    def get_hpo(self) -> list[str | int]:
        return list(self._hpo)

    def has_hpo(self, term_id: str | int) -> bool:
        return term_id in self._hpo

    def add_hpo(self, term: str | int | LegendItem) -> Outcome:
        legend = self.legends.hpo
        item = term if isinstance(term, LegendItem) else legend.get_item(term)
        if self.has_hpo(item.id):
            logger.warning("person.hpo_already_present", node=self.node_id, term=item.id)
            return Outcome.ALREADY_PRESENT
        legend.add_case(item.id, item.name, self.node_id)
        self._hpo.append(item.id)
        return Outcome.APPLIED

    def remove_hpo(self, term_id: str | int) -> Outcome:
        if not self.has_hpo(term_id):
            logger.warning("person.hpo_not_present", node=self.node_id, term=term_id)
            return Outcome.NOT_PRESENT
        self.legends.hpo.remove_case(term_id, self.node_id)
        self._hpo.remove(term_id)
        return Outcome.APPLIED

    def set_hpo(self, terms: Iterable[str | int | LegendItem]) -> None:
        for term_id in reversed(self._hpo[:]):
            self.remove_hpo(term_id)
        for term in terms:
            self.add_hpo(term)

    # ------------------------------------------------------------------
    # Genes
    # ------------------------------------------------------------------

    def get_genes(self) -> dict[str, dict[str, Any]]:
        """Map of gene name -> gene details (a copy)."""
        return copy.deepcopy(self._genes)

    def add_gene(
        self, gene: str, status: str, properties: Mapping[str, Any] | None = None
    ) -> Outcome:
        """Add ``gene`` with ``status``, or move an existing gene to ``status``.

        Extra ``properties`` are merged into the gene details.
        """
        existing = self._genes.get(gene)
        if existing is not None and existing["status"] == status:
            logger.debug("person.gene_already_present", node=self.node_id, gene=gene, status=status)
            return Outcome.ALREADY_PRESENT

        extra = {
            key: copy.deepcopy(value)
            for key, value in (properties or {}).items()
            if key not in ("gene", "status")
        }
        if existing is None:
            self._genes[gene] = {"gene": gene, "status": status, **extra}
        else:
            old_status = existing["status"]
            existing["status"] = status
            existing.update(extra)
            old_legend = self.legends.gene_legend(old_status)
            if old_legend is not None:
                old_legend.remove_case(gene, self.node_id)

        new_legend = self.legends.gene_legend(status)
        if new_legend is not None:
            new_legend.add_case(gene, gene, self.node_id)
        return Outcome.APPLIED

    def remove_gene(self, gene: str) -> Outcome:
        existing = self._genes.get(gene)
        if existing is None:
            logger.warning("person.gene_not_present", node=self.node_id, gene=gene)
            return Outcome.NOT_PRESENT
        legend = self.legends.gene_legend(existing["status"])
        if legend is not None:
            legend.remove_case(gene, self.node_id)
        del self._genes[gene]
        return Outcome.APPLIED

    def _set_genes(self, genes: Iterable[str], status: str) -> None:
        """Make ``genes`` exactly the genes of ``status`` on this node."""
        genes = list(genes)
        wanted = set(genes)
        for gene, details in list(self._genes.items()):
            if details["status"] == status and gene not in wanted:
                self.remove_gene(gene)
        for gene in genes:
            self.add_gene(gene, status)
        self._graphics.update_disorder_shapes()

    def _get_gene_array(self, status: str) -> list[str]:
        return [gene for gene, details in self._genes.items() if details["status"] == status]

    def set_candidate_genes(self, genes: Iterable[str]) -> None:
        self._set_genes(genes, GeneStatus.CANDIDATE.value)

    def set_causal_genes(self, genes: Iterable[str]) -> None:
        self._set_genes(genes, GeneStatus.SOLVED.value)

    def set_rejected_genes(self, genes: Iterable[str]) -> None:
        self._set_genes(genes, GeneStatus.REJECTED.value)

    def get_candidate_genes(self) -> list[str]:
        return self._get_gene_array(GeneStatus.CANDIDATE.value)

    def get_causal_genes(self) -> list[str]:
        return self._get_gene_array(GeneStatus.SOLVED.value)

    def get_rejected_genes(self) -> list[str]:
        return self._get_gene_array(GeneStatus.REJECTED.value)

    # ------------------------------------------------------------------
    # Cancers
    # ------------------------------------------------------------------

    def get_cancers(self) -> dict[str, dict[str, Any]]:
        return copy.deepcopy(self._cancers)

    def add_cancer(self, cancer_name: str, details: Mapping[str, Any] | None) -> Outcome:
        """Attach a common cancer; only affected cancers enter the legend."""
        if cancer_name in self._cancers:
            logger.warning("person.cancer_already_present", node=self.node_id, cancer=cancer_name)
            return Outcome.ALREADY_PRESENT
        details = copy.deepcopy(dict(details or {}))
        if details.get("affected"):
            self.legends.cancers.add_case(cancer_name, cancer_name, self.node_id)
        self._cancers[cancer_name] = details
        return Outcome.APPLIED

    def remove_cancer(self, cancer_name: str) -> Outcome:
        details = self._cancers.get(cancer_name)
        if details is None:
            logger.warning("person.cancer_not_present", node=self.node_id, cancer=cancer_name)
            return Outcome.NOT_PRESENT
        if details.get("affected"):
            self.legends.cancers.remove_case(cancer_name, self.node_id)
        del self._cancers[cancer_name]
        return Outcome.APPLIED

    def set_cancers(self, cancers: Mapping[str, Mapping[str, Any]] | None) -> None:
        for cancer_name in list(self._cancers):
            self.remove_cancer(cancer_name)
        for cancer_name, details in dict(cancers or {}).items():
            self.add_cancer(cancer_name, details)
        self._graphics.update_disorder_shapes()
        self._graphics.update_cancer_age_of_onset_labels()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _clear_collections(self) -> None:
        """Deregister every disorder, HPO term, gene and cancer of this node."""
        self.set_disorders([])
        self.set_hpo([])
        self.set_candidate_genes([])
        self.set_causal_genes([])
        for gene in list(self._genes):
            self.remove_gene(gene)
        self.set_cancers({})

    def reset(self) -> None:
        """Return every field to its default, releasing legend references."""
        self._clear_collections()
        gender = self._identity.gender
        self._identity.reset()
        self._set_default()
        if self._identity.gender != gender:
            self._graphics.update_gender_shapes()

    def remove(self) -> None:
        """Release the node: clear all legend references, then its graphics."""
        if self._removed:
            return
        self._context.extensions.call(ExtensionPoint.PERSON_REMOVED, {"node": self})
        self._clear_collections()
        self._graphics.remove()
        self._removed = True
        logger.debug("person.removed", node=self.node_id)

    # ------------------------------------------------------------------
    # Records and menu
    # ------------------------------------------------------------------

    def get_summary(self) -> dict[str, dict[str, Any]]:
        """Node-menu data: every editable field and whether it may be changed."""
        return menu.build_menu_data(self)

    def get_properties(self) -> dict[str, Any]:
        """Sparse external record of this node (defaults omitted)."""
        return codec.to_record(self)

    def assign_properties(self, record: Mapping[str, Any]) -> bool:
        """Reset the node and apply an external record through the setters."""
        return codec.from_record(self, record)

    def __repr__(self) -> str:
        return f"Person(id={self.node_id!r}, life_status={self._life_status!r})"
