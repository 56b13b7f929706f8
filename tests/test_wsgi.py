from unittest.mock import patch
import sys


def test_wsgi_builds_application_without_migrating():
    sys.modules.pop("vendor_portal.wsgi", None)
    with patch("django.core.management.call_command") as call, patch(
        "django.core.wsgi.get_wsgi_application"
    ) as get_app:
        import vendor_portal.wsgi as wsgi

    get_app.assert_called_once_with()
    assert wsgi.application is get_app.return_value
    call.assert_not_called()
