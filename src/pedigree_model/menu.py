"""Node-menu summary of a person.

The menu record lists every editable field of a node with its current value
and two flags used by the UI: ``inactive`` (hidden or greyed out because the
field does not apply) and ``disabled`` (shown but locked). Either flag may be
``False``/``True`` or a list of option values it applies to.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pedigree_model.extensions import ExtensionPoint
from pedigree_model.models import AFFECTED_DISORDER, CarrierStatus, LifeStatus

if TYPE_CHECKING:
    from pedigree_model.person import Person

FETUS_STATE_OPTIONS = [
    LifeStatus.UNBORN.value,
    LifeStatus.ABORTED.value,
    LifeStatus.MISCARRIAGE.value,
    LifeStatus.STILLBORN.value,
]


def _life_state_flags(person: Person, once_alive: bool) -> tuple[Any, Any]:
    # a node with relationships was born at some point
    inactive_states: Any = list(FETUS_STATE_OPTIONS) if once_alive else False
    disabled_states: Any = False
    if person.is_proband():
        disabled_states = [
            status.value for status in LifeStatus if status.value != person.get_life_status()
        ]
    return inactive_states, disabled_states


def _gender_flags(person: Person) -> tuple[Any, Any]:
    graph = person.context.graph
    inactive_genders: Any = False
    disabled_genders: Any = [] if person.is_proband() else False
    for gender, possible in graph.get_possible_genders(person.node_id).items():
        if not possible:
            if not inactive_genders:
                inactive_genders = []
            inactive_genders.append(gender)
        if person.is_proband() and gender != person.get_gender():
            disabled_genders.append(gender)
    return inactive_genders, disabled_genders


def _adopted_flag(person: Person, once_alive: bool) -> Any:
    cant_change: Any = person.is_fetus() or person.context.graph.has_to_be_adopted(person.node_id)
    # a person with relationships can't be adopted out: the details would be unknown
    if not cant_change and once_alive:
        cant_change = ["adoptedOut", "disableViaOpacity"]
    return cant_change


def _monozygotic_flags(person: Person) -> tuple[bool, bool]:
    inactive = True
    disabled = True
    if person.get_twin_group() is not None:
        graph = person.context.graph
        twins = graph.get_all_twins_sorted_by_order(person.node_id)
        if len(twins) > 1:
            # monozygotic twins must all share one gender
            inactive = False
            disabled = any(graph.get_gender(twin) != person.get_gender() for twin in twins)
    return inactive, disabled


def _carrier_flags(person: Person, disorders: list[dict[str, Any]]) -> list[str]:
    inactive_carriers: list[str] = []
    if disorders and (len(disorders) != 1 or disorders[0]["id"] != AFFECTED_DISORDER):
        inactive_carriers = [CarrierStatus.NONE.value]
    if person.get_life_status() in (LifeStatus.ABORTED.value, LifeStatus.MISCARRIAGE.value):
        inactive_carriers.append(CarrierStatus.PRESYMPTOMATIC.value)
    return inactive_carriers


def build_menu_data(person: Person) -> dict[str, dict[str, Any]]:
    """Build the node-menu record of ``person``.

    The ``personGetNodeMenuData`` extensions may rewrite the result.
    """
    graph = person.context.graph
    legends = person.legends
    proband = person.is_proband()
    fetus = person.is_fetus()
    once_alive = graph.has_relationships(person.node_id)

    inactive_states, disabled_states = _life_state_flags(person, once_alive)
    inactive_genders, disabled_genders = _gender_flags(person)
    inactive_monozygotic, disable_monozygotic = _monozygotic_flags(person)

    disorders = [
        {"id": disorder, "value": legends.disorders.get_name(disorder)}
        for disorder in person.get_disorders()
    ]
    hpo_terms = [{"id": term, "value": legends.hpo.get_name(term)} for term in person.get_hpo()]

    birth_date = person.get_birth_date()
    death_date = person.get_death_date()
    rejected_genes = person.get_rejected_genes()
    childless_status = person.get_childless_status()
    inactive_lost_contact = proband or not graph.is_related_to_proband(person.node_id)

    menu_data: dict[str, dict[str, Any]] = {
        "identifier": {"value": person.node_id},
        "first_name": {"value": person.get_first_name(), "disabled": proband},
        "last_name": {"value": person.get_last_name(), "disabled": proband},
        "last_name_birth": {"value": person.get_last_name_at_birth()},
        "external_id": {"value": person.get_external_id(), "disabled": proband},
        "gender": {
            "value": person.get_gender(),
            "inactive": inactive_genders,
            "disabled": disabled_genders,
        },
        "date_of_birth": {
            "value": birth_date.get_simple_object() if birth_date else None,
            "inactive": fetus,
            "disabled": proband,
        },
        "carrier": {
            "value": person.get_carrier_status(),
            "disabled": _carrier_flags(person, disorders),
        },
        "disorders": {"value": disorders, "disabled": proband},
        "ethnicity": {"value": person.get_ethnicities()},
        "candidate_genes": {"value": person.get_candidate_genes(), "disabled": proband},
        "causal_genes": {"value": person.get_causal_genes(), "disabled": proband},
        "rejected_genes": {
            "value": rejected_genes,
            "disabled": True,
            "inactive": len(rejected_genes) == 0,
        },
        "adopted": {
            "value": person.get_adopted_status(),
            "inactive": _adopted_flag(person, once_alive),
        },
        "state": {
            "value": person.get_life_status(),
            "inactive": inactive_states,
            "disabled": disabled_states,
        },
        "date_of_death": {
            "value": death_date.get_simple_object() if death_date else None,
            "inactive": fetus,
            "disabled": proband,
        },
        # the same comments are shown on every tab
        "commentsClinical": {"value": person.get_comments(), "inactive": False},
        "commentsPersonal": {"value": person.get_comments(), "inactive": False},
        "commentsCancers": {"value": person.get_comments(), "inactive": False},
        "gestation_age": {"value": person.get_gestation_age(), "inactive": not fetus},
        "childlessSelect": {
            "value": childless_status or "none",
            "inactive": fetus,
        },
        "childlessText": {
            "value": person.get_childless_reason(),
            "inactive": fetus,
            "disabled": not childless_status,
        },
        "placeholder": {"value": False, "inactive": True},
        "monozygotic": {
            "value": person.get_monozygotic(),
            "inactive": inactive_monozygotic,
            "disabled": disable_monozygotic,
        },
        "evaluated": {"value": person.get_evaluated()},
        "hpo_positive": {"value": hpo_terms, "disabled": proband},
        "nocontact": {"value": person.get_lost_contact(), "inactive": inactive_lost_contact},
        "cancers": {"value": person.get_cancers()},
        "phenotipsid": {"value": person.get_phenotips_patient_id()},
    }

    payload = person.context.extensions.call(
        ExtensionPoint.PERSON_MENU_DATA, {"menuData": menu_data, "node": person}
    )
    return payload["menuData"]
