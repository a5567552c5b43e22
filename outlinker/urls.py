"""URL configuration for the outlinker API.

The ``app_name`` namespace is what the throttle middleware matches
against in ``THROTTLED_ROUTES``.
"""

from django.urls import path

from . import views

app_name = 'outlinker'

urlpatterns = [
    path('links/external/', views.external_links, name='external_links'),
    path('links/internal/', views.internal_links, name='internal_links'),
    path('website-context/', views.website_context, name='website_context'),
]
