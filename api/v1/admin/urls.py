"""
URL configuration for admin API endpoints.
"""

from django.urls import path

from api.v1.admin import views

urlpatterns = [
    path("licenses", views.LicenseListCreateView.as_view(), name="admin-licenses"),
    path(
        "licenses/<str:license_key>",
        views.LicenseDetailView.as_view(),
        name="admin-license-detail",
    ),
    path("stats", views.StatsView.as_view(), name="admin-stats"),
    path("products", views.ProductListCreateView.as_view(), name="admin-products"),
    path(
        "products/<uuid:product_id>",
        views.ProductDetailView.as_view(),
        name="admin-product-detail",
    ),
]
