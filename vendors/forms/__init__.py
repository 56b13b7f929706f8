from .vendor_forms import VendorForm

__all__ = ["VendorForm"]
