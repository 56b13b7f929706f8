"""Exceptions raised while talking to the vendor backend."""


class VendorError(Exception):
    """Base class for vendor portal errors.

    ``message`` is safe to show to the operator as-is.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class VendorServiceError(VendorError):
    """A backend call failed, either in transport or with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class VendorNotFoundError(VendorServiceError):
    """The requested vendor could not be loaded."""

    def __init__(self, message: str = "Vendor not found", status_code: int | None = None):
        super().__init__(message, status_code=status_code)
