"""Tests for the pedigree node collection."""

import pytest

from pedigree_model.exceptions import DuplicateNode, InvalidNodeId, MalformedRecord
from pedigree_model.models import Outcome
from pedigree_model.pedigree import Pedigree

RECORDS = [
    {"id": 0, "properties": {"gender": "F", "fName": "Jane", "disorders": ["OMIM:154700"],
                             "carrierStatus": "affected"}},
    {"id": 1, "properties": {"gender": "F", "twinGroup": 1, "monozygotic": True,
                             "disorders": ["OMIM:154700"], "carrierStatus": "affected"}},
    {"id": 2, "properties": {"gender": "F", "twinGroup": 1,
                             "genes": [{"gene": "FBN1", "status": "solved"}]}},
    {"id": 3, "properties": {}},
]


class TestPedigree:
    """Tests for adding, finding and removing nodes."""

    def test_add_and_get(self):
        """Test adding a person."""
        pedigree = Pedigree()
        person = pedigree.add_person(0, {"fName": "Jane"})
        assert pedigree.get_person(0) is person
        assert person.is_proband()
        assert 0 in pedigree
        assert len(pedigree) == 1
        assert pedigree.get_person(9) is None

    def test_duplicate(self):
        """Test that node ids are unique."""
        pedigree = Pedigree()
        pedigree.add_person(1)
        with pytest.raises(DuplicateNode):
            pedigree.add_person(1)

    def test_invalid_id(self):
        """Test that unusable ids are refused."""
        with pytest.raises(InvalidNodeId):
            Pedigree().add_person("U")

    def test_shared_legends(self):
        """Test that nodes of one pedigree share legends."""
        pedigree = Pedigree()
        pedigree.add_person(1).add_disorder("flu")
        pedigree.add_person(2).add_disorder("flu")
        assert pedigree.legends.disorders.get_cases("flu") == {1, 2}

        assert pedigree.remove_person(1) is Outcome.APPLIED
        assert pedigree.legends.disorders.get_cases("flu") == {2}
        assert pedigree.remove_person(1) is Outcome.NOT_PRESENT


class TestRecords:
    """Tests for loading and exporting record lists."""

    def test_round_trip(self):
        """Test that loaded records are exported unchanged."""
        pedigree = Pedigree()
        assert pedigree.load_records(RECORDS) == 4
        assert pedigree.to_records() == RECORDS

    def test_legends_after_load(self):
        """Test legend contents after loading."""
        pedigree = Pedigree()
        pedigree.load_records(RECORDS)
        assert pedigree.legends.disorders.get_cases("OMIM:154700") == {0, 1}
        assert pedigree.legends.genes["solved"].get_cases("FBN1") == {2}

    def test_twins_from_records(self):
        """Test that twin groups are read from the loaded nodes."""
        pedigree = Pedigree()
        pedigree.load_records(RECORDS)
        menu = pedigree.get_person(1).get_summary()
        assert menu["monozygotic"] == {"value": True, "inactive": False, "disabled": False}

        pedigree.get_person(2).set_gender("M")
        assert pedigree.get_person(1).get_summary()["monozygotic"]["disabled"] is True

    def test_load_replaces_content(self):
        """Test that loading drops earlier nodes and their legend entries."""
        pedigree = Pedigree()
        pedigree.add_person(7).add_disorder("flu")
        pedigree.load_records(RECORDS)
        assert 7 not in pedigree
        assert "flu" not in pedigree.legends.disorders

    @pytest.mark.parametrize(
        "records,error",
        [
            ({"id": 0}, MalformedRecord),
            (["node"], MalformedRecord),
            ([{"properties": {}}], InvalidNodeId),
            ([{"id": "U"}], InvalidNodeId),
            ([{"id": [1]}], MalformedRecord),
            ([{"id": 1, "properties": "none"}], MalformedRecord),
            ([{"id": 1}, {"id": 1}], DuplicateNode),
        ],
    )
    def test_malformed_lists(self, records, error):
        """Test that broken record lists raise before any node changes."""
        pedigree = Pedigree()
        pedigree.add_person(5)
        with pytest.raises(error):
            pedigree.load_records(records)
        assert 5 in pedigree

    def test_broken_node_record_empties(self):
        """Test that a node record failing to load leaves an empty pedigree."""
        pedigree = Pedigree()
        with pytest.raises(MalformedRecord):
            pedigree.load_records([{"id": 1, "properties": {"disorders": ["flu"]}},
                                   {"id": 2, "properties": {"genes": "FBN1"}}])
        assert len(pedigree) == 0
        assert len(pedigree.legends.disorders) == 0
