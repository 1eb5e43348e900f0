"""
URL patterns for the matching app.

JSON endpoints consumed by the seller dashboard's opportunity panel.
"""

from django.urls import path

from . import views

app_name = 'matching'

urlpatterns = [
    path(
        'sellers/<uuid:seller_id>/opportunities/',
        views.SellerOpportunitiesView.as_view(),
        name='seller-opportunities',
    ),
]
