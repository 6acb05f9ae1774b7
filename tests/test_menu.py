"""Tests for the node-menu summary."""

from pedigree_model.legend import LegendItem
from pedigree_model.person import Person

FETUS_OPTIONS = ["unborn", "aborted", "miscarriage", "stillborn"]


class TestProbandLocks:
    """Tests for fields locked on the proband."""

    def test_proband_fields_disabled(self, context):
        """Test that identifying fields of the proband are disabled."""
        menu = Person(0, context=context).get_summary()
        for key in ("first_name", "last_name", "external_id", "date_of_birth", "date_of_death",
                    "disorders", "candidate_genes", "causal_genes", "hpo_positive"):
            assert menu[key]["disabled"] is True, key
        assert menu["state"]["disabled"] == ["deceased", "stillborn", "unborn", "aborted", "miscarriage"]
        assert menu["nocontact"]["inactive"] is True

    def test_other_nodes_editable(self, context):
        """Test that the same fields are open on other nodes."""
        menu = Person(3, context=context).get_summary()
        assert menu["first_name"]["disabled"] is False
        assert menu["state"]["disabled"] is False
        assert menu["gender"]["disabled"] is False

    def test_proband_gender_locked(self, context):
        """Test that the proband may not change gender."""
        p = Person(0, context=context)
        p.set_gender("F")
        menu = p.get_summary()
        assert menu["gender"]["disabled"] == ["M", "U"]
        assert menu["gender"]["inactive"] is False


class TestGraphConstraints:
    """Tests for fields constrained by the pedigree graph."""

    def test_impossible_genders(self, context, graph):
        """Test that genders ruled out by the graph are inactive."""
        graph.impossible_genders[3] = {"F"}
        assert Person(3, context=context).get_summary()["gender"]["inactive"] == ["F"]

    def test_node_with_relationships(self, context, graph):
        """Test that a node with partners cannot be a fetus or adopted out."""
        graph.with_relationships.add(3)
        menu = Person(3, context=context).get_summary()
        assert menu["state"]["inactive"] == FETUS_OPTIONS
        assert menu["adopted"]["inactive"] == ["adoptedOut", "disableViaOpacity"]

    def test_must_be_adopted(self, context, graph):
        """Test that adoption is locked when the graph requires it."""
        graph.must_be_adopted.add(3)
        assert Person(3, context=context).get_summary()["adopted"]["inactive"] is True

    def test_lost_contact_needs_relation(self, context, graph):
        """Test that lost contact applies only to relatives of the proband."""
        assert Person(3, context=context).get_summary()["nocontact"]["inactive"] is True
        graph.related_to_proband.add(4)
        assert Person(4, context=context).get_summary()["nocontact"]["inactive"] is False

    def test_monozygotic_needs_twins(self, context, graph):
        """Test that the monozygotic flag needs a multi-member twin group."""
        p = Person(3, context=context)
        assert p.get_summary()["monozygotic"]["inactive"] is True

        p.set_twin_group(1)
        assert p.get_summary()["monozygotic"]["inactive"] is True

        graph.twin_groups.append([3, 4])
        graph.genders.update({3: "F", 4: "F"})
        p.set_gender("F")
        menu = p.get_summary()
        assert menu["monozygotic"]["inactive"] is False
        assert menu["monozygotic"]["disabled"] is False

        graph.genders[4] = "M"
        assert p.get_summary()["monozygotic"]["disabled"] is True


class TestClinicalFields:
    """Tests for fields that depend on the person itself."""

    def test_fetus_fields(self, context):
        """Test the fields of a fetus."""
        p = Person(3, context=context)
        p.set_life_status("unborn")
        p.set_gestation_age(12)
        menu = p.get_summary()
        assert menu["date_of_birth"]["inactive"] is True
        assert menu["gestation_age"] == {"value": 12, "inactive": False}
        assert menu["adopted"]["inactive"] is True
        assert menu["childlessSelect"]["inactive"] is True

    def test_born_person_has_no_gestation(self, context):
        """Test that gestation age is hidden for born persons."""
        menu = Person(3, context=context).get_summary()
        assert menu["gestation_age"] == {"value": None, "inactive": True}
        assert menu["adopted"]["inactive"] is False

    def test_carrier_options(self, context):
        """Test which carrier statuses may be chosen."""
        p = Person(3, context=context)
        assert p.get_summary()["carrier"]["disabled"] == []

        p.set_carrier_status("affected")
        assert p.get_summary()["carrier"]["disabled"] == []

        p.add_disorder("flu")
        assert p.get_summary()["carrier"]["disabled"] == [""]

        p.set_life_status("aborted")
        assert p.get_summary()["carrier"]["disabled"] == ["", "presymptomatic"]

    def test_disorder_and_hpo_names(self, context):
        """Test that disorders and HPO terms carry legend names."""
        p = Person(3, context=context)
        p.add_disorder(LegendItem(id="OMIM:154700", name="Marfan syndrome"))
        p.add_hpo("HP:0001250")
        menu = p.get_summary()
        assert menu["disorders"]["value"] == [{"id": "OMIM:154700", "value": "Marfan syndrome"}]
        assert menu["hpo_positive"]["value"] == [{"id": "HP:0001250", "value": "HP:0001250"}]

    def test_childless_and_dates(self, context):
        """Test childless and date entries."""
        p = Person(3, context=context)
        p.set_birth_date({"year": 1970, "month": 5})
        menu = p.get_summary()
        assert menu["date_of_birth"]["value"] == {"year": 1970, "month": 5}
        assert menu["date_of_death"]["value"] is None
        assert menu["childlessSelect"]["value"] == "none"
        assert menu["childlessText"]["disabled"] is True

        p.set_childless_status("infertile")
        assert p.get_summary()["childlessText"]["disabled"] is False

    def test_rejected_genes(self, context):
        """Test that rejected genes are read-only and hidden when empty."""
        p = Person(3, context=context)
        assert p.get_summary()["rejected_genes"] == {"value": [], "disabled": True, "inactive": True}
        p.set_rejected_genes(["MYH7"])
        assert p.get_summary()["rejected_genes"]["inactive"] is False

    def test_comments_on_every_tab(self, context):
        """Test that comments are shown on each tab."""
        p = Person(3, context=context)
        p.set_comments("see notes")
        menu = p.get_summary()
        assert menu["commentsClinical"]["value"] == "see notes"
        assert menu["commentsPersonal"]["value"] == "see notes"
        assert menu["commentsCancers"]["value"] == "see notes"
