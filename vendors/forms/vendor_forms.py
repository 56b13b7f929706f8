from typing import Mapping

from django import forms

from ..models import Category, Vendor
from .base import StyledFormMixin


class VendorForm(StyledFormMixin, forms.Form):
    """Bind and render the add/edit vendor fields.

    Fields are not marked required here: the vendor validation rules produce
    the messages and are copied onto the form with :meth:`apply_errors`.
    """

    name = forms.CharField(label="Name", required=False, max_length=255)
    contact = forms.CharField(label="Contact", required=False, max_length=255)
    email = forms.CharField(label="Email", required=False, max_length=254)
    phone = forms.CharField(label="Phone", required=False, max_length=50)
    address = forms.CharField(
        label="Address", required=False, widget=forms.Textarea(attrs={"rows": 3})
    )
    category = forms.ChoiceField(
        label="Category",
        required=False,
        choices=[("", "Select a category")] + list(Category.choices),
    )

    @classmethod
    def for_vendor(cls, vendor: Vendor) -> "VendorForm":
        return cls(initial=vendor.to_dict())

    def apply_errors(self, errors: Mapping[str, str]) -> None:
        for field, message in errors.items():
            self.add_error(field if field in self.fields else None, message)
        self.apply_styling()
