"""Root URL configuration for outlinker_tool."""

from django.urls import include, path

urlpatterns = [
    path('api/', include('outlinker.urls')),
]
