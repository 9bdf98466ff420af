"""
Integration tests for the plugin update API.
"""

from urllib.parse import parse_qs, urlsplit

import pytest
from django.conf import settings
from django.urls import reverse

from products.application.commands.product_commands import CreateProductCommand
from products.infrastructure.download_links import DownloadLinkSigner


@pytest.fixture
def plugin(engine):
    return engine.create_product(
        CreateProductCommand(
            slug="tlat",
            name="Tutor LMS Tracking",
            description="Analytics for Tutor LMS",
            current_version="1.2.0",
            download_url="https://files.example.com/tlat-1.2.0.zip",
            changelog="- Faster reports\n- Cohort export",
        )
    )


@pytest.fixture
def activated_key(engine, plugin, license_factory):
    license = license_factory(product_id=plugin.id)
    engine.activate_license(license.license_key, "example.com")
    return license.license_key


@pytest.mark.django_db
@pytest.mark.integration
class TestUpdateCheckAPI:
    """Integration tests for /api/v1/update/check."""

    def test_update_with_download_link(self, api_client, activated_key):
        response = api_client.post(
            reverse("update-check"),
            {
                "slug": "tlat",
                "version": "1.0.0",
                "license_key": activated_key,
                "domain": "example.com",
                "wp_version": "6.4",
                "php_version": "8.2",
            },
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["has_update"] is True
        assert data["license_valid"] is True
        assert data["latest_version"] == "1.2.0"
        assert data["update_info"]["changelog"] == ["Faster reports", "Cohort export"]

        url = data["update_info"]["download_url"]
        assert url.startswith("https://files.example.com/tlat-1.2.0.zip?token=")
        token = parse_qs(urlsplit(url).query)["token"][0]
        claims = DownloadLinkSigner(settings.LICENSE_JWT_SECRET).verify(token, "tlat", "1.2.0")
        assert claims["domain"] == "example.com"

    def test_domain_not_activated_gets_no_link(self, api_client, activated_key):
        response = api_client.post(
            reverse("update-check"),
            {
                "slug": "tlat",
                "version": "1.0.0",
                "license_key": activated_key,
                "domain": "other.com",
            },
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["has_update"] is True
        assert data["license_valid"] is False
        assert data["update_info"]["download_url"] is None

    def test_license_for_other_plugin_gets_no_link(self, api_client, engine, plugin, product):
        license = engine.create_license(email="a@example.com", product_id=product.id).license
        engine.activate_license(license.license_key, "example.com")

        response = api_client.post(
            reverse("update-check"),
            {
                "slug": "tlat",
                "version": "1.0.0",
                "license_key": license.license_key,
                "domain": "example.com",
            },
            format="json",
        )

        assert response.json()["license_valid"] is False
        assert response.json()["update_info"]["download_url"] is None

    def test_version_check_without_license(self, api_client, plugin):
        response = api_client.post(
            reverse("update-check"), {"slug": "tlat", "version": "1.2.0"}, format="json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["has_update"] is False
        assert data["license_valid"] is False
        assert data["update_info"] is None

    def test_unknown_plugin(self, api_client, db):
        response = api_client.post(
            reverse("update-check"), {"slug": "nope", "version": "1.0.0"}, format="json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["has_update"] is False
        assert data["latest_version"] is None
        assert data["current_version"] == "1.0.0"

    def test_missing_slug(self, api_client, db):
        response = api_client.post(reverse("update-check"), {"version": "1.0.0"}, format="json")

        assert response.status_code == 400
        assert response.json()["error"] == "missing_params"


@pytest.mark.django_db
@pytest.mark.integration
class TestPluginInfoAPI:
    """Integration tests for /api/v1/update/info and /changelog."""

    def test_info(self, api_client, plugin):
        response = api_client.get(reverse("update-info", kwargs={"slug": "tlat"}))

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Tutor LMS Tracking"
        assert data["version"] == "1.2.0"
        assert data["sections"]["description"] == "<p>Analytics for Tutor LMS</p>"
        assert "<li>Faster reports</li>" in data["sections"]["changelog"]

    def test_info_not_found(self, api_client, db):
        response = api_client.get(reverse("update-info", kwargs={"slug": "nope"}))

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_changelog(self, api_client, plugin):
        response = api_client.get(reverse("update-changelog", kwargs={"slug": "tlat"}))

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "slug": "tlat",
            "changelog": [{"version": "1.2.0", "changes": ["Faster reports", "Cohort export"]}],
        }

    def test_changelog_not_found(self, api_client, db):
        response = api_client.get(reverse("update-changelog", kwargs={"slug": "nope"}))

        assert response.status_code == 404

    def test_admin_can_set_changelog(self, admin_client, plugin):
        response = admin_client.patch(
            reverse("admin-product-detail", kwargs={"product_id": plugin.id}),
            {"current_version": "1.3.0", "changelog": "- New dashboard"},
            format="json",
        )
        assert response.status_code == 200
        assert response.json()["changelog"] == "- New dashboard"

        response = admin_client.get(reverse("update-changelog", kwargs={"slug": "tlat"}))
        assert response.json()["changelog"][0] == {
            "version": "1.3.0",
            "changes": ["New dashboard"],
        }
