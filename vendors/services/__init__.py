"""Backend access and pure list/validation helpers for the vendor pages."""
