"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.v1.license import views

urlpatterns = [
    path("activate", views.ActivateLicenseView.as_view(), name="license-activate"),
    path("deactivate", views.DeactivateLicenseView.as_view(), name="license-deactivate"),
    path("validate", views.ValidateLicenseView.as_view(), name="license-validate"),
    path("heartbeat", views.HeartbeatView.as_view(), name="license-heartbeat"),
    path("status", views.LicenseStatusView.as_view(), name="license-status"),
]
