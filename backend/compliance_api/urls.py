"""
URL configuration for compliance_api project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/
"""

from django.http import JsonResponse
from django.urls import include, path


def api_root(request):
    """API root endpoint with available endpoints."""
    return JsonResponse({
        'message': 'HOS Compliance API',
        'version': '1.0',
        'endpoints': {
            'hos_compliance': '/api/hos/',
        },
        'documentation': {
            'hos_compliance': {
                'description': 'Hours of Service compliance evaluation',
                'endpoints': {
                    'evaluate': 'POST /api/hos/evaluate/ - Evaluate a driver duty history',
                    'health': 'GET /api/hos/health/ - Liveness check',
                }
            },
        }
    })


urlpatterns = [
    # API root
    path("api/", api_root, name='api-root'),

    # HOS Compliance API
    path("api/hos/", include("hos_compliance.urls")),
]
