from __future__ import annotations

from django import forms

INPUT_CLASS = "form-input"
SELECT_CLASS = "form-input form-select"
ERROR_CLASS = "is-invalid"


class StyledFormMixin:
    """Apply CSS classes to form widgets, marking fields that have errors."""

    def apply_styling(self) -> None:
        errors = self._errors or {}
        for name, field in self.fields.items():
            widget = field.widget
            classes = SELECT_CLASS if isinstance(widget, forms.Select) else INPUT_CLASS
            if name in errors:
                classes += f" {ERROR_CLASS}"
            widget.attrs.update({"class": classes})

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.apply_styling()
