"""Core application configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core app."""

    name = "core"

    def ready(self):  # pragma: no cover - executed via Django startup
        """Set up logging once the app registry is ready."""

        from vendor_portal.logging import configure_logging

        configure_logging()
