from django.apps import AppConfig


class VendorsConfig(AppConfig):
    """Configuration for the vendors app."""

    name = "vendors"
    verbose_name = "Vendors"
