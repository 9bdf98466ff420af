"""
URL configuration for plugin update endpoints.
"""

from django.urls import path

from api.v1.updates import views

urlpatterns = [
    path("check", views.UpdateCheckView.as_view(), name="update-check"),
    path("info/<slug:slug>", views.PluginInfoView.as_view(), name="update-info"),
    path("changelog/<slug:slug>", views.ChangelogView.as_view(), name="update-changelog"),
]
