import pytest

from pilarahan.services.reference_store import InMemoryReferenceStore
from pilarahan.utils.geo import calculate_distance

SF = (37.7749, -122.4194)


def test_distance_sf_to_la():
    assert calculate_distance(*SF, 34.0522, -118.2437) == pytest.approx(347.4, abs=1.0)


def test_distance_to_self_is_zero():
    assert calculate_distance(*SF, *SF) == 0.0


def test_waste_types_sorted_by_name():
    names = [w.name for w in InMemoryReferenceStore().list_waste_types()]
    assert names == sorted(names)
    assert names[0] == "Batteries"


def test_get_waste_type():
    store = InMemoryReferenceStore()
    assert store.get_waste_type("Glass").category == "Recycling"
    assert store.get_waste_type("Styrofoam") is None


def test_learning_resources_have_ids_and_timestamps():
    store = InMemoryReferenceStore()
    resources = store.list_learning_resources()

    assert [r.id for r in resources] == list(range(1, len(resources) + 1))
    assert store.get_learning_resource(2).title == "Composting 101"
    assert store.get_learning_resource(999) is None
    assert all(r.created_at for r in resources)


def test_nearby_centers_sorted_by_distance():
    centers = InMemoryReferenceStore().nearby_recycling_centers(*SF)

    assert centers[0].name == "EcoCycle Recycling Center"
    assert centers[0].distance == 0.0
    distances = [c.distance for c in centers]
    assert distances == sorted(distances)
    assert len(centers) == 5


@pytest.mark.parametrize("category", [None, "", "all", "ALL"])
def test_nearby_without_filter(category):
    assert len(InMemoryReferenceStore().nearby_recycling_centers(*SF, category)) == 5


def test_nearby_filtered_by_category():
    centers = InMemoryReferenceStore().nearby_recycling_centers(*SF, "e-waste")

    assert [c.name for c in centers] == ["TechRecycle Solutions", "Metro Hazardous Waste Facility"]
    assert {wt.name for wt in centers[0].waste_types} == {"Electronic", "Batteries"}


def test_recycling_center_detail_lists_waste_types():
    store = InMemoryReferenceStore()
    center = store.get_recycling_center(1)

    assert center.name == "EcoCycle Recycling Center"
    assert [w.name for w in center.waste_types] == ["Plastic", "Paper", "Glass"]
    assert store.get_recycling_center(42) is None


def test_custom_rows_override_seed():
    store = InMemoryReferenceStore(
        waste_types=[
            {
                "name": "Cans",
                "description": "",
                "is_recyclable": True,
                "disposal_instructions": "Rinse",
                "category": "Recycling",
                "color_class": "primary",
            }
        ],
        recycling_centers=[{"name": "Depot", "address": "1 Main St", "latitude": 0.0, "longitude": 0.0}],
        center_waste_types={"Depot": ["Cans", "Unknown"]},
    )

    (center,) = store.nearby_recycling_centers(0.0, 0.0, "recycling")
    assert center.name == "Depot"
    assert [wt.name for wt in center.waste_types] == ["Cans"]
