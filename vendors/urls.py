from django.urls import path

from .views import (
    VendorCreateView,
    VendorDeleteView,
    VendorEditView,
    VendorsExportView,
    VendorsListView,
    VendorsTableView,
)

urlpatterns = [
    path("", VendorsListView.as_view(), name="vendors_list"),
    path("table/", VendorsTableView.as_view(), name="vendors_table"),
    path("export/", VendorsExportView.as_view(), name="vendors_export"),
    path("add/", VendorCreateView.as_view(), name="vendor_create"),
    path("<str:vendor_id>/edit/", VendorEditView.as_view(), name="vendor_edit"),
    path("<str:vendor_id>/delete/", VendorDeleteView.as_view(), name="vendor_delete"),
]
