from vendors import controllers
from vendors.controllers import VendorFormController, VendorListController
from vendors.exceptions import VendorNotFoundError
from vendors.services.list_utils import ListState

import pytest


def test_list_controller_loads_then_is_ready(api_client, backend):
    controller = VendorListController(api_client)
    assert controller.status == controllers.LOADING
    assert controller.load() is None
    assert controller.status == controllers.READY
    assert [v.name for v in controller.vendors] == ["Acme", "Beta"]
    assert backend.count("GET") == 1


def test_list_controller_load_failure_surfaces_message(api_client, backend):
    backend.failures[("GET", "/api/vendors")] = 503
    controller = VendorListController(api_client)
    assert controller.load() == "Failed to fetch vendors."
    assert controller.status == controllers.READY
    assert controller.vendors == []


def test_derive_filters_sorts_and_pages(api_client):
    controller = VendorListController(api_client)
    controller.load()
    page = controller.derive(ListState(query="acme"))
    assert [v.id for v in page.vendors] == [1]
    assert page.total == 1

    page = controller.derive(ListState(sort="name", direction="desc"))
    assert [v.name for v in page.vendors] == ["Beta", "Acme"]


def test_derive_clamps_page_past_the_end(api_client):
    controller = VendorListController(api_client)
    controller.load()
    page = controller.derive(ListState(page=4, page_size=5))
    assert page.page == 0
    assert page.pages == 1
    assert len(page.vendors) == 2
    assert not page.has_previous and not page.has_next


def test_delete_removes_locally_without_refetch(api_client, backend):
    controller = VendorListController(api_client)
    controller.load()
    ok, message = controller.delete(1)
    assert ok
    assert message == "Vendor deleted successfully."
    assert [v.id for v in controller.vendors] == [2]
    assert backend.count("GET") == 1
    assert controller.status == controllers.READY


def test_delete_failure_keeps_collection(api_client, backend):
    backend.failures[("DELETE", "/api/vendors/1")] = 500
    controller = VendorListController(api_client)
    controller.load()
    ok, message = controller.delete(1)
    assert not ok
    assert message == "Failed to delete vendor."
    assert [v.id for v in controller.vendors] == [1, 2]


def test_find_matches_string_ids(api_client):
    controller = VendorListController(api_client)
    controller.load()
    assert controller.find("2").name == "Beta"
    assert controller.find("9") is None


def test_add_with_blank_name_never_calls_backend(api_client, backend, vendor_form_data):
    controller = VendorFormController(api_client)
    result = controller.submit(vendor_form_data(name=""))
    assert not result.ok
    assert result.errors == {"name": "Name is required."}
    assert controller.status == controllers.IDLE
    assert backend.count("POST") == 0


def test_add_success(api_client, backend, vendor_form_data):
    controller = VendorFormController(api_client)
    result = controller.submit(vendor_form_data())
    assert result.ok
    assert result.message == "Vendor added successfully!"
    assert result.vendor.id == 3
    assert controller.status == controllers.SUCCESS
    assert backend.vendors["3"]["name"] == "Gamma"


def test_add_failure_returns_to_idle(api_client, backend, vendor_form_data):
    backend.failures[("POST", "/api/vendors")] = 500
    controller = VendorFormController(api_client)
    result = controller.submit(vendor_form_data())
    assert not result.ok
    assert result.message == "Failed to add vendor."
    assert controller.status == controllers.IDLE


def test_submit_while_submitting_is_rejected(api_client, backend, vendor_form_data):
    controller = VendorFormController(api_client)
    controller.status = controllers.SUBMITTING
    result = controller.submit(vendor_form_data())
    assert not result.ok
    assert result.message == "A submission is already in progress."
    assert backend.count("POST") == 0


def test_edit_requires_load_before_submit(api_client, backend, vendor_form_data):
    controller = VendorFormController(api_client, 1)
    assert controller.status == controllers.LOADING
    result = controller.submit(vendor_form_data())
    assert not result.ok
    assert backend.count("PUT", "/api/vendors/1") == 0


def test_edit_load_and_update(api_client, backend, vendor_form_data):
    controller = VendorFormController(api_client, 1)
    assert controller.load().name == "Acme"
    result = controller.submit(vendor_form_data(name="Acme Ltd"))
    assert result.ok
    assert result.message == "Vendor updated successfully!"
    assert backend.vendors["1"]["name"] == "Acme Ltd"
    assert backend.vendors["1"]["id"] == 1


def test_edit_load_missing_vendor(api_client):
    controller = VendorFormController(api_client, 42)
    with pytest.raises(VendorNotFoundError) as exc:
        controller.load()
    assert exc.value.message == "Vendor not found"


def test_add_controller_cannot_load(api_client):
    with pytest.raises(ValueError):
        VendorFormController(api_client).load()


def test_edit_keeps_backend_id_type(api_client, backend, vendor_form_data):
    controller = VendorFormController(api_client, "1")
    controller.load()
    result = controller.submit(vendor_form_data(name="Acme Ltd"))
    assert result.ok
    method, path, body = backend.requests[-1]
    assert (method, path) == ("PUT", "/api/vendors/1")
    assert body["id"] == 1
