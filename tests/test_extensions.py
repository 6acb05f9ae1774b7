"""Tests for extension hooks."""

import pytest

from pedigree_model.extensions import ExtensionManager, ExtensionPoint
from pedigree_model.person import Person


class TestExtensionManager:
    """Tests for the callback registry."""

    def test_callbacks_run_in_order(self):
        """Test that callbacks run in registration order and may replace the payload."""
        manager = ExtensionManager()
        seen = []

        def first(payload):
            seen.append(("first", dict(payload)))
            return {"value": payload["value"] + 1}

        def second(payload):
            seen.append(("second", dict(payload)))

        manager.register(ExtensionPoint.PERSON_TO_MODEL, first)
        manager.register("personToModel", second)

        result = manager.call(ExtensionPoint.PERSON_TO_MODEL, {"value": 1})
        assert result == {"value": 2}
        assert seen == [("first", {"value": 1}), ("second", {"value": 2})]

    def test_unregister(self):
        """Test removing a callback."""
        manager = ExtensionManager()

        def hook(payload):
            return {"replaced": True}

        manager.register(ExtensionPoint.PERSON_CREATED, hook)
        assert manager.unregister(ExtensionPoint.PERSON_CREATED, hook)
        assert not manager.unregister(ExtensionPoint.PERSON_CREATED, hook)
        assert manager.call(ExtensionPoint.PERSON_CREATED, {"node": None}) == {"node": None}

    def test_unknown_point(self):
        """Test that unknown extension points are refused."""
        with pytest.raises(ValueError):
            ExtensionManager().register("personExploded", lambda payload: None)


class TestPersonHooks:
    """Tests for the lifecycle points fired by person nodes."""

    def test_created_before_properties(self, context):
        """Test that creation fires before the record is applied."""
        names = []
        context.extensions.register(
            ExtensionPoint.PERSON_CREATED, lambda payload: names.append(payload["node"].get_first_name())
        )
        p = Person(1, {"fName": "Ann"}, context=context)
        assert names == [""]
        assert p.get_first_name() == "Ann"

    def test_export_hook_transforms_record(self, context):
        """Test that exported records pass through the export hook."""

        def add_family_id(payload):
            payload["modelData"]["familyId"] = "FAM-{}".format(payload["node"].get_id())

        context.extensions.register(ExtensionPoint.PERSON_TO_MODEL, add_family_id)
        assert Person(4, context=context).get_properties() == {"familyId": "FAM-4"}

    def test_import_hook_sees_record(self, context):
        """Test that the import hook receives the loaded record."""
        loaded = []
        context.extensions.register(
            ExtensionPoint.MODEL_TO_PERSON, lambda payload: loaded.append(payload["modelData"])
        )
        Person(4, {"fName": "Ann", "familyId": "FAM-4"}, context=context)
        assert loaded == [{"fName": "Ann", "familyId": "FAM-4"}]

    def test_menu_hook(self, context):
        """Test that the menu hook may replace the menu data."""

        def lock_names(payload):
            menu = dict(payload["menuData"])
            menu["first_name"] = {**menu["first_name"], "disabled": True}
            return {"menuData": menu, "node": payload["node"]}

        context.extensions.register(ExtensionPoint.PERSON_MENU_DATA, lock_names)
        assert Person(4, context=context).get_summary()["first_name"]["disabled"] is True
