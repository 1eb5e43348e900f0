"""
URL configuration for the MyTarget matching service.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.urls import path, include

from matching.views import HealthCheckView, ReadinessCheckView

urlpatterns = [
    # Health checks
    path('health/', HealthCheckView.as_view(), name='health'),
    path('health/ready/', ReadinessCheckView.as_view(), name='health-ready'),

    path("matching/", include("matching.urls")),
]
