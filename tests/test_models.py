from vendors.models import Category, Vendor


def test_from_dict_parses_category_and_fills_blanks():
    vendor = Vendor.from_dict({"id": 5, "name": "Acme", "category": "Packaging"})
    assert vendor.id == 5
    assert vendor.category is Category.PACKAGING
    assert vendor.contact == ""
    assert vendor.address == ""


def test_unknown_category_is_dropped(caplog):
    vendor = Vendor.from_dict({"id": 5, "name": "Acme", "category": "Furniture"})
    assert vendor.category is None
    assert "Furniture" in caplog.text


def test_payload_omits_id():
    vendor = Vendor(id=3, name="Acme", category=Category.UTENSILS)
    payload = vendor.payload()
    assert "id" not in payload
    assert payload["category"] == "Utensils"
    assert vendor.to_dict()["id"] == 3


def test_to_dict_round_trips_through_from_dict():
    vendor = Vendor(id="abc", name="Acme", email="jo@acme.com", category=Category.CONTAINERS)
    assert Vendor.from_dict(vendor.to_dict()) == vendor


def test_category_parse():
    assert Category.parse(" Utensils ") is Category.UTENSILS
    assert Category.parse("") is None
    assert Category.parse(None) is None
    assert Category.parse("utensils") is None
