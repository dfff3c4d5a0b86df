"""Tests for the application data store."""

import pytest

from onboarding_assistant.core.application import ApplicationStore, flatten_extracted_value
from onboarding_assistant.core.models import DocumentRecord, Location, SolutionPackage


class TestExtractedData:
    """Tests for merging extracted data."""

    def test_merge_overwrites_per_key(self):
        store = ApplicationStore()
        store.update_extracted_data({"businessName": "Bean There", "city": "Austin"})
        store.update_extracted_data({"city": "Dallas"})

        assert store.snapshot().extracted_data == {"businessName": "Bean There", "city": "Dallas"}

    def test_empty_patch_is_noop(self):
        store = ApplicationStore()
        store.update_extracted_data({"a": "1"})

        assert store.update_extracted_data({}) == {}
        assert store.snapshot().extracted_data == {"a": "1"}

    def test_non_string_values_flattened(self):
        store = ApplicationStore()

        applied = store.update_extracted_data(
            {"locations": 2, "mobile": True, "owner": {"name": "Sam", "age": 40}, "note": None}
        )

        assert applied == {
            "locations": "2",
            "mobile": "true",
            "owner": '{"age": 40, "name": "Sam"}',
        }
        assert all(isinstance(v, str) for v in store.snapshot().extracted_data.values())

    @pytest.mark.parametrize(
        "value,expected",
        [("x", "x"), (False, "false"), (3.5, "3.5"), (["a", "b"], '["a", "b"]'), (None, None)],
    )
    def test_flatten_extracted_value(self, value, expected):
        assert flatten_extracted_value(value) == expected


class TestStructuredFields:
    """Tests for the explicit field mutations."""

    def test_business_type(self):
        store = ApplicationStore()
        store.set_business_type("restaurant")
        assert store.snapshot().business_type == "restaurant"

        with pytest.raises(ValueError):
            store.set_business_type("spaceport")

    def test_business_info_shallow_merge(self):
        store = ApplicationStore()
        store.update_business_info({"name": "Bean There", "phone": "555"})
        store.update_business_info({"phone": "556"})

        assert store.snapshot().business_info == {"name": "Bean There", "phone": "556"}

    def test_locations_keep_order(self):
        store = ApplicationStore()
        store.add_location(Location("Main St", "1 Main St", "Sam"))
        store.add_location(Location("Airport", "Terminal B", "Alex"))

        assert [loc.name for loc in store.snapshot().locations] == ["Main St", "Airport"]

    def test_selected_package_from_dict(self):
        store = ApplicationStore()
        store.set_selected_package(
            {
                "name": "Restaurant Solution",
                "type": "restaurant",
                "recommendedFor": ["restaurant"],
                "hardware": [
                    {
                        "name": "Clover Station Duo",
                        "model": "duo",
                        "price": 1699.0,
                        "description": "Dual-screen POS",
                        "category": "stationary",
                    }
                ],
                "totalCost": 1699,
            }
        )

        package = store.snapshot().selected_package
        assert isinstance(package, SolutionPackage)
        assert package.hardware[0].name == "Clover Station Duo"
        assert package.to_dict()["totalCost"] == 1699.0

    def test_documents_appended(self):
        store = ApplicationStore()
        store.add_document(DocumentRecord("license.pdf", "businessLicense", {"number": "BL-1"}, 0.9))

        assert store.snapshot().documents[0].type == "businessLicense"


class TestSnapshotAndReset:
    """Tests for snapshots and reset."""

    def test_snapshot_is_detached(self):
        store = ApplicationStore()
        store.update_business_info({"name": "A"})
        snapshot = store.snapshot()

        store.update_business_info({"name": "B"})
        snapshot.business_info["name"] = "C"

        assert store.snapshot().business_info == {"name": "B"}

    def test_snapshot_to_dict_keys(self):
        data = ApplicationStore().snapshot().to_dict()

        assert data == {
            "businessType": None,
            "businessInfo": {},
            "selectedPackage": None,
            "locations": [],
            "documents": [],
            "extractedData": {},
        }

    def test_reset(self):
        store = ApplicationStore()
        store.set_business_type("retail")
        store.update_extracted_data({"a": "1"})
        store.add_location(Location("Main", "1 Main", "Sam"))
        store.complete_application()

        store.reset()

        snapshot = store.snapshot()
        assert snapshot.business_type is None
        assert snapshot.extracted_data == {}
        assert snapshot.locations == ()
        assert snapshot.application_complete is False
