from django.http import HttpResponse
from django.shortcuts import redirect


def root_view(request):
    """Send visitors to the vendor list."""
    return redirect("vendors_list")


def health_check(request):
    return HttpResponse("ok")
