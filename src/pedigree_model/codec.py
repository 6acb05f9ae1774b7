"""Sparse external property records for person nodes.

A record carries only non-default fields, keyed by stable external names::

    {"gender": "F", "fName": "Jane", "dob": {"year": 1980, "month": 4},
     "disorders": ["OMIM:114480"], "carrierStatus": "affected",
     "genes": [{"gene": "BRCA1", "status": "solved"}]}

Loading resets the node and replays the record through the node's own
setters, so legend bookkeeping and derived fields behave exactly as for
interactive edits.
"""
from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from pedigree_model.exceptions import MalformedRecord
from pedigree_model.extensions import ExtensionPoint
from pedigree_model.models import CancerDetails, GeneRecord, LifeStatus

if TYPE_CHECKING:
    from pedigree_model.person import Person

logger = structlog.get_logger(__name__)

RECORD_KEYS = (
    "gender",
    "comments",
    "adoptedStatus",
    "phenotipsId",
    "fName",
    "lName",
    "lNameAtB",
    "externalID",
    "dob",
    "lifeStatus",
    "dod",
    "gestationAge",
    "childlessStatus",
    "childlessReason",
    "disorders",
    "cancers",
    "hpoTerms",
    "genes",
    "ethnicities",
    "twinGroup",
    "monozygotic",
    "evaluated",
    "carrierStatus",
    "lostContact",
    "nodeNumber",
)

# keys whose values must be strings when present
TEXT_KEYS = (
    "gender",
    "comments",
    "adoptedStatus",
    "phenotipsId",
    "fName",
    "lName",
    "lNameAtB",
    "externalID",
    "lifeStatus",
    "childlessStatus",
    "childlessReason",
    "carrierStatus",
    "nodeNumber",
)


def to_record(person: Person) -> dict[str, Any]:
    """Export ``person`` as a sparse record; defaults and empties are left out."""
    info: dict[str, Any] = person.get_identity_properties()

    if person.get_phenotips_patient_id():
        info["phenotipsId"] = person.get_phenotips_patient_id()
    if person.get_first_name():
        info["fName"] = person.get_first_name()
    if person.get_last_name():
        info["lName"] = person.get_last_name()
    if person.get_last_name_at_birth():
        info["lNameAtB"] = person.get_last_name_at_birth()
    if person.get_external_id():
        info["externalID"] = person.get_external_id()

    birth_date = person.get_birth_date()
    if birth_date is not None:
        info["dob"] = birth_date.get_simple_object()
    if person.get_life_status() != LifeStatus.ALIVE.value:
        info["lifeStatus"] = person.get_life_status()
    death_date = person.get_death_date()
    if death_date is not None:
        info["dod"] = death_date.get_simple_object()
    gestation_age = person.get_gestation_age()
    if gestation_age is not None:
        info["gestationAge"] = gestation_age
    if person.get_childless_status() is not None:
        info["childlessStatus"] = person.get_childless_status()
        if person.get_childless_reason():
            info["childlessReason"] = person.get_childless_reason()

    if person.get_disorders():
        info["disorders"] = person.get_disorders()
    if person.get_cancers():
        info["cancers"] = person.get_cancers()
    if person.get_hpo():
        info["hpoTerms"] = person.get_hpo()
    genes = format_genes(person)
    if genes:
        info["genes"] = genes
    if person.get_ethnicities():
        info["ethnicities"] = person.get_ethnicities()

    if person.get_twin_group() is not None:
        info["twinGroup"] = person.get_twin_group()
    if person.get_monozygotic():
        info["monozygotic"] = True
    if person.get_evaluated():
        info["evaluated"] = True
    if person.get_carrier_status():
        info["carrierStatus"] = person.get_carrier_status()
    if person.get_lost_contact():
        info["lostContact"] = True
    if person.get_ped_number():
        info["nodeNumber"] = person.get_ped_number()

    payload = person.context.extensions.call(
        ExtensionPoint.PERSON_TO_MODEL, {"modelData": info, "node": person}
    )
    return payload["modelData"]


def format_genes(person: Person) -> list[dict[str, Any]]:
    """Flatten the gene map into ``[{gene, status, ...extra}, ...]``."""
    return list(person.get_genes().values())


def _validated_genes(raw: Any) -> list[dict[str, Any]]:
    if not isinstance(raw, list):
        raise MalformedRecord("genes must be a list", field="genes")
    genes = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            raise MalformedRecord("gene entry must be an object", field="genes")
        try:
            validated = GeneRecord.model_validate(entry)
        except ValidationError as e:
            raise MalformedRecord(f"invalid gene entry: {e.errors()[0]['msg']}", field="genes") from e
        gene = copy.deepcopy(dict(entry))
        gene["status"] = validated.status
        genes.append(gene)
    return genes


def _validated_cancers(raw: Any) -> dict[str, dict[str, Any]]:
    if not isinstance(raw, Mapping):
        raise MalformedRecord("cancers must be an object", field="cancers")
    cancers = {}
    for name, details in raw.items():
        if not isinstance(details, Mapping):
            raise MalformedRecord(f"cancer {name!r} details must be an object", field="cancers")
        try:
            CancerDetails.model_validate(details)
        except ValidationError as e:
            raise MalformedRecord(f"invalid cancer {name!r}: {e.errors()[0]['msg']}", field="cancers") from e
        cancers[name] = dict(details)
    return cancers


def _as_list(record: Mapping[str, Any], key: str, item_types: tuple[type, ...]) -> list[Any]:
    value = record[key]
    if not isinstance(value, (list, tuple)):
        raise MalformedRecord(f"{key} must be a list", field=key)
    for item in value:
        if isinstance(item, bool) or not isinstance(item, item_types):
            raise MalformedRecord(f"{key} entry {item!r} has the wrong type", field=key)
    return list(value)


def _check_scalars(record: Mapping[str, Any]) -> None:
    for key in TEXT_KEYS:
        value = record.get(key)
        if value is not None and not isinstance(value, str):
            raise MalformedRecord(f"{key} must be a string, got {type(value).__name__}", field=key)
    twin_group = record.get("twinGroup")
    if twin_group is not None and (isinstance(twin_group, bool) or not isinstance(twin_group, (str, int))):
        raise MalformedRecord("twinGroup must be a string or an integer", field="twinGroup")


def from_record(person: Person, record: Mapping[str, Any]) -> bool:
    """Reset ``person`` and apply ``record`` through its setters.

    Life status is applied before the fields it clears (dates, adoption,
    gestation, childless status), so a valid record is reproduced as given.
    Carrier status comes last because it depends on the disorders.
    """
    if not isinstance(record, Mapping):
        raise MalformedRecord(f"record must be an object, got {type(record).__name__}")

    # validate everything up front so a bad record leaves the node untouched
    _check_scalars(record)
    genes = _validated_genes(record["genes"]) if "genes" in record else []
    cancers = _validated_cancers(record["cancers"]) if "cancers" in record else {}
    disorders = _as_list(record, "disorders", (str, int)) if "disorders" in record else []
    hpo_terms = _as_list(record, "hpoTerms", (str, int)) if "hpoTerms" in record else []
    ethnicities = _as_list(record, "ethnicities", (str,)) if "ethnicities" in record else []

    person.reset()

    if "gender" in record:
        person.set_gender(record["gender"])
    if record.get("comments"):
        person.set_comments(record["comments"])
    if record.get("phenotipsId"):
        person.set_phenotips_patient_id(record["phenotipsId"])
    if record.get("fName"):
        person.set_first_name(record["fName"])
    if record.get("lName"):
        person.set_last_name(record["lName"])
    if record.get("lNameAtB"):
        person.set_last_name_at_birth(record["lNameAtB"])
    if record.get("externalID"):
        person.set_external_id(record["externalID"])

    for disorder in disorders:
        person.add_disorder(disorder)
    if cancers:
        person.set_cancers(cancers)
    if hpo_terms:
        person.set_hpo(hpo_terms)
    for gene in genes:
        person.add_gene(gene["gene"], gene["status"], gene)
    if ethnicities:
        person.set_ethnicities(ethnicities)

    if "lifeStatus" in record:
        person.set_life_status(record["lifeStatus"])
    if record.get("dob"):
        person.set_birth_date(record["dob"])
    if record.get("dod"):
        person.set_death_date(record["dod"])
    if record.get("adoptedStatus"):
        person.set_adopted_status(record["adoptedStatus"])
    if record.get("gestationAge") is not None:
        person.set_gestation_age(record["gestationAge"])
    if record.get("childlessStatus"):
        person.set_childless_status(record["childlessStatus"])
    if record.get("childlessReason"):
        person.set_childless_reason(record["childlessReason"])

    if "twinGroup" in record:
        person.set_twin_group(record["twinGroup"])
    if "monozygotic" in record:
        person.set_monozygotic(record["monozygotic"])
    if "evaluated" in record:
        person.set_evaluated(record["evaluated"])
    if "nodeNumber" in record:
        person.set_ped_number(record["nodeNumber"])
    if "lostContact" in record:
        person.set_lost_contact(record["lostContact"])
    if "carrierStatus" in record:
        person.set_carrier_status(record["carrierStatus"])

    unknown = sorted(set(record) - set(RECORD_KEYS))
    if unknown:
        logger.debug("codec.unknown_keys", node=person.node_id, keys=unknown)

    person.context.extensions.call(
        ExtensionPoint.MODEL_TO_PERSON, {"modelData": record, "node": person}
    )
    return True
