"""
URL configuration for the storefront configurator.

/api/     configurator endpoints (apps.catalog.api)
/health/  liveness probe
"""
from django.http import JsonResponse
from django.urls import path, include


def health(request):
    return JsonResponse({'status': 'ok'})


urlpatterns = [
    path('api/', include('apps.catalog.api.urls')),
    path('health/', health, name='health'),
]
