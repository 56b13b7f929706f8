import logging
from typing import List, Optional

from django.contrib import messages
from django.http import HttpResponse
from django.shortcuts import redirect, render
from django.template.loader import render_to_string
from django.urls import reverse
from django.views import View
from django.views.generic import TemplateView

from .controllers import VendorFormController, VendorListController
from .exceptions import VendorNotFoundError
from .forms import VendorForm
from .models import Vendor
from .services import list_utils, vendor_client

logger = logging.getLogger(__name__)

# Session key for the vendor collection held by the list page.
SNAPSHOT_KEY = "vendors_snapshot"

COLUMNS = ["id", "name", "contact", "email", "phone", "category"]


def _held_vendors(request) -> Optional[List[Vendor]]:
    rows = request.session.get(SNAPSHOT_KEY)
    if rows is None:
        return None
    return [Vendor.from_dict(row) for row in rows]


def _hold_vendors(request, vendors: List[Vendor]) -> None:
    request.session[SNAPSHOT_KEY] = [vendor.to_dict() for vendor in vendors]


def _list_controller(request, refresh: bool = False) -> VendorListController:
    """Return a list controller over the session's vendors.

    The backend is only contacted when ``refresh`` is set or the session
    does not hold a collection yet. Fetch failures become error messages.
    """

    held = None if refresh else _held_vendors(request)
    controller = VendorListController(vendor_client.get_vendor_client(), held)
    if held is None:
        error = controller.load()
        if error:
            messages.error(request, error)
            request.session.pop(SNAPSHOT_KEY, None)
        else:
            _hold_vendors(request, controller.vendors)
    return controller


def _table_context(page) -> dict:
    state = page.state
    columns = []
    for name in COLUMNS:
        sortable = name in list_utils.SORTABLE_COLUMNS
        columns.append(
            {
                "name": name,
                "label": name.capitalize(),
                "sortable": sortable,
                "active": sortable and state.sort == name,
                "direction": state.direction if state.sort == name else "asc",
                "query": list_utils.build_querystring(
                    state.toggle_sort(name).as_query(), exclude=()
                )
                if sortable
                else "",
            }
        )
    return {
        "page": page,
        "state": state,
        "columns": columns,
        "page_number": page.page + 1,
        "page_size_options": list_utils.PAGE_SIZE_OPTIONS,
        "state_query": list_utils.build_querystring(state.as_query(), exclude=()),
        # Rendered with the table so every swap carries the current view.
        "export_query": list_utils.build_querystring(state.as_query()),
        "previous_query": list_utils.build_querystring(
            state.with_page(page.page - 1).as_query(), exclude=()
        ),
        "next_query": list_utils.build_querystring(
            state.with_page(page.page + 1).as_query(), exclude=()
        ),
        "table_url": reverse("vendors_table"),
    }


class VendorsListView(TemplateView):
    """Vendor list page: filters, export button and the first table page.

    Every visit fetches the collection from the backend and holds it in the
    session for the table, export and delete requests that follow.
    GET params: q, field, sort, direction, page, page_size.
    Template: vendors/vendors_list.html.
    """

    template_name = "vendors/vendors_list.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        controller = _list_controller(self.request, refresh=True)
        state = list_utils.ListState.from_query(self.request.GET)
        page = controller.derive(state)
        ctx.update(_table_context(page))
        ctx["filter_options"] = [
            {"value": value, "label": value.capitalize()}
            for value in list_utils.FILTER_CHOICES
        ]
        return ctx


class VendorsTableView(TemplateView):
    """Re-render the vendor table from the collection held in the session.

    Accepts the same GET params as VendorsListView.
    Template: vendors/_vendors_table.html.
    """

    template_name = "vendors/_vendors_table.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        controller = _list_controller(self.request)
        state = list_utils.ListState.from_query(self.request.GET)
        ctx.update(_table_context(controller.derive(state)))
        return ctx


class VendorsExportView(View):
    """Download the filtered and sorted vendor list as CSV.

    Uses the same GET parameters as VendorsListView; paging is ignored so
    every matching vendor is exported.
    """

    def get(self, request):
        controller = _list_controller(request)
        state = list_utils.ListState.from_query(request.GET)
        page = controller.derive(state)
        logger.info("Exporting %d vendor(s)", page.total)
        return list_utils.export_as_csv(page.matches)


class VendorCreateView(View):
    """Create a vendor through the backend.

    Template: vendors/vendor_form.html.
    """

    template_name = "vendors/vendor_form.html"

    def get(self, request):
        return render(request, self.template_name, {"form": VendorForm(), "is_edit": False})

    def post(self, request):
        form = VendorForm(request.POST)
        if form.is_valid():
            controller = VendorFormController(vendor_client.get_vendor_client())
            result = controller.submit(form.cleaned_data)
            if result.ok:
                messages.success(request, result.message)
                return redirect("vendors_list")
            form.apply_errors(result.errors)
            if result.message:
                messages.error(request, result.message)
        else:
            form.apply_styling()
        return render(request, self.template_name, {"form": form, "is_edit": False})


class VendorEditView(View):
    """Edit an existing vendor.

    A vendor that cannot be loaded sends the user back to the list with an
    error message. Template: vendors/vendor_form.html.
    """

    template_name = "vendors/vendor_form.html"

    def _load(self, request, vendor_id: str):
        controller = VendorFormController(vendor_client.get_vendor_client(), vendor_id)
        try:
            controller.load()
        except VendorNotFoundError as exc:
            messages.error(request, exc.message)
            return controller, redirect("vendors_list")
        return controller, None

    def _render(self, request, form, controller):
        ctx = {"form": form, "is_edit": True, "vendor": controller.vendor}
        return render(request, self.template_name, ctx)

    def get(self, request, vendor_id: str):
        controller, response = self._load(request, vendor_id)
        if response is not None:
            return response
        return self._render(request, VendorForm.for_vendor(controller.vendor), controller)

    def post(self, request, vendor_id: str):
        controller, response = self._load(request, vendor_id)
        if response is not None:
            return response
        form = VendorForm(request.POST)
        if form.is_valid():
            result = controller.submit(form.cleaned_data)
            if result.ok:
                messages.success(request, result.message)
                return redirect("vendors_list")
            form.apply_errors(result.errors)
            if result.message:
                messages.error(request, result.message)
        else:
            form.apply_styling()
        return self._render(request, form, controller)


class VendorDeleteView(View):
    """Confirm and delete a vendor.

    HTMX requests get the refreshed table (built from the held collection,
    without re-fetching) plus an out-of-band toast; plain form posts are
    redirected to the list. Template: vendors/vendor_confirm_delete.html.
    """

    template_name = "vendors/vendor_confirm_delete.html"

    def get(self, request, vendor_id: str):
        controller = _list_controller(request)
        vendor = controller.find(vendor_id)
        if vendor is None:
            messages.error(request, "Vendor not found")
            return redirect("vendors_list")
        return render(request, self.template_name, {"vendor": vendor})

    def post(self, request, vendor_id: str):
        controller = _list_controller(request)
        ok, message = controller.delete(vendor_id)
        if ok:
            _hold_vendors(request, controller.vendors)
        level = "success" if ok else "error"

        if request.headers.get("HX-Request"):
            state = list_utils.ListState.from_query(request.GET)
            table_html = render_to_string(
                "vendors/_vendors_table.html",
                _table_context(controller.derive(state)),
                request=request,
            )
            toast_html = render_to_string(
                "components/toast.html",
                {"message": message, "level": level},
                request=request,
            )
            return HttpResponse(
                table_html
                + f'<div id="toast-container" hx-swap-oob="beforeend">{toast_html}</div>'
            )

        if ok:
            messages.success(request, message)
        else:
            messages.error(request, message)
        return redirect("vendors_list")
