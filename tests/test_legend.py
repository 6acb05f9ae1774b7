"""Tests for legend registries."""

import pytest
from structlog.testing import capture_logs

from pedigree_model.config import PedigreeConfig
from pedigree_model.legend import Legend, LegendItem, Legends
from pedigree_model.models import Outcome


class TestLegend:
    """Tests for a single legend."""

    @pytest.mark.parametrize("n", [1, 3, 5])
    def test_reference_counting(self, n):
        """Test that an item stays until its last node is removed."""
        legend = Legend("disorders")
        for node_id in range(n):
            assert legend.add_case("OMIM:154700", "Marfan syndrome", node_id) is Outcome.APPLIED

        for node_id in range(n - 1):
            legend.remove_case("OMIM:154700", node_id)
            assert legend.has_reference("OMIM:154700")
        assert legend.get_cases("OMIM:154700") == {n - 1}

        legend.remove_case("OMIM:154700", n - 1)
        assert not legend.has_reference("OMIM:154700")
        assert "OMIM:154700" not in legend
        assert len(legend) == 0

    def test_add_twice(self):
        """Test that a repeated add is a no-op."""
        legend = Legend("hpo")
        legend.add_case("HP:0001250", "Seizure", 3)
        assert legend.add_case("HP:0001250", "Seizure", 3) is Outcome.ALREADY_PRESENT
        assert legend.get_cases("HP:0001250") == {3}

    def test_remove_missing_warns(self):
        """Test that removing an unregistered pair warns and changes nothing."""
        legend = Legend("cancers")
        legend.add_case("Breast", "Breast", 1)

        with capture_logs() as logs:
            assert legend.remove_case("Breast", 2) is Outcome.NOT_PRESENT
            assert legend.remove_case("Colon", 1) is Outcome.NOT_PRESENT

        assert legend.get_cases("Breast") == {1}
        warnings = [entry["event"] for entry in logs if entry["log_level"] == "warning"]
        assert warnings == ["legend.remove_missing", "legend.remove_missing"]

    def test_items_keep_registration_order(self):
        """Test that items are listed in first-registration order."""
        legend = Legend("disorders")
        legend.add_case("b", None, 1)
        legend.add_case("a", None, 1)
        legend.add_case("c", None, 2)
        legend.add_case("b", None, 2)
        assert legend.items() == ["b", "a", "c"]

    def test_names(self):
        """Test display names and their default."""
        legend = Legend("disorders")
        assert legend.get_name("OMIM:1") == "OMIM:1"

        legend.add_case("OMIM:1", "Some disorder", 1)
        legend.remove_case("OMIM:1", 1)
        # the name survives the last case
        assert legend.get_item("OMIM:1") == LegendItem(id="OMIM:1", name="Some disorder")

        legend.set_name("OMIM:2", "Other")
        assert str(legend.get_item("OMIM:2")) == "Other"


class TestLegends:
    """Tests for the legend bundle."""

    def test_default_gene_statuses(self):
        """Test that candidate and solved genes have legends by default."""
        legends = Legends(config=PedigreeConfig(gene_legend_statuses=("candidate", "solved")))
        assert set(legends.genes) == {"candidate", "solved"}
        assert legends.gene_legend("rejected") is None

    def test_custom_gene_statuses(self):
        """Test explicit gene statuses."""
        legends = Legends(gene_statuses=["candidate", "solved", "carrier"])
        assert legends.gene_legend("carrier").category == "genes:carrier"
        assert len(legends.all()) == 6

    def test_references_node(self):
        """Test looking up whether any legend still refers to a node."""
        legends = Legends(gene_statuses=["candidate"])
        assert not legends.references_node(4)
        legends.genes["candidate"].add_case("BRCA1", "BRCA1", 4)
        assert legends.references_node(4)
        legends.genes["candidate"].remove_case("BRCA1", 4)
        assert not legends.references_node(4)
