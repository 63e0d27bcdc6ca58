"""
URL configuration for HOS Compliance API endpoints.
"""

from django.urls import path

from .views import HealthCheckView, HOSEvaluationViewSet

urlpatterns = [
    path('evaluate/',
         HOSEvaluationViewSet.as_view({'post': 'evaluate'}),
         name='hos-evaluate'),
    path('health/', HealthCheckView.as_view(), name='hos-health'),
]

# API Documentation - Available Endpoints:
"""
GET Endpoints:
- /api/hos/health/ - Liveness check

POST Endpoints:
- /api/hos/evaluate/ - Evaluate HOS compliance for a driver's duty history
"""
