"""
Tests for /services routes - public catalog and admin management.
"""

from unittest.mock import patch

from app.core.storage_utils import (
    delete_public_url,
    extract_path_from_public_url,
    upload_to_storage,
)
from tests.utils.factories import build_service, persist

SERVICES_URL = "/api/v1/services"
STORAGE_URL = "https://test-project.supabase.co/storage/v1/object/public/assets"


def test_public_list_hides_inactive(client, db_session, admin_headers):
    active, retired = persist(
        db_session,
        build_service(name="Duvet wash"),
        build_service(name="Fur storage", is_active=False),
    )

    public = client.get(SERVICES_URL).json()
    everything = client.get(
        SERVICES_URL, params={"only_active": False}, headers=admin_headers
    ).json()

    assert [s["id"] for s in public] == [str(active.id)]
    assert {s["id"] for s in everything} == {str(active.id), str(retired.id)}


def test_inactive_listing_is_admin_only(client, customer_headers):
    anonymous = client.get(SERVICES_URL, params={"only_active": False})
    as_customer = client.get(
        SERVICES_URL, params={"only_active": False}, headers=customer_headers
    )

    assert anonymous.status_code == 403
    assert as_customer.status_code == 403


def test_search_matches_name_or_description(client, db_session):
    persist(
        db_session,
        build_service(name="Shirt laundering"),
        build_service(name="Curtain care", description="Heavy drapes and SHIRT-like linen"),
        build_service(name="Suit pressing"),
        build_service(name="Shirt express", is_active=False),
    )

    names = [s["name"] for s in client.get(SERVICES_URL, params={"search": "shirt"}).json()]

    assert names == ["Curtain care", "Shirt laundering"]


def test_admin_creates_and_updates_service(client, admin_headers):
    created = client.post(
        SERVICES_URL,
        json={"name": "  Wedding dress care ", "price": 120.0, "delivery_days": 7},
        headers=admin_headers,
    )

    assert created.status_code == 201
    service_id = created.json()["id"]
    assert created.json()["name"] == "Wedding dress care"

    updated = client.patch(
        f"{SERVICES_URL}/{service_id}",
        json={"price": 135.0},
        headers=admin_headers,
    )

    assert updated.json()["price"] == 135.0
    assert updated.json()["delivery_days"] == 7


def test_customer_cannot_create_service(client, customer_headers):
    response = client.post(
        SERVICES_URL,
        json={"name": "Sneaker clean", "price": 12.0},
        headers=customer_headers,
    )

    assert response.status_code == 403


def test_delete_only_deactivates(client, db_session, admin_headers):
    (service,) = persist(db_session, build_service(name="Curtain cleaning"))

    response = client.delete(f"{SERVICES_URL}/{service.id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["is_active"] is False
    assert client.get(f"{SERVICES_URL}/{service.id}").status_code == 200


def test_missing_service_is_404(client):
    response = client.get(f"{SERVICES_URL}/00000000-0000-0000-0000-000000000000")

    assert response.status_code == 404


def test_upload_image_stores_public_url(client, db_session, admin_headers):
    (service,) = persist(db_session, build_service(name="Rug cleaning"))
    expected_url = f"{STORAGE_URL}/services/{service.id}/cover.png"

    with patch(
        "app.services.catalog_service.upload_to_storage",
        return_value=expected_url,
    ) as upload:
        response = client.post(
            f"{SERVICES_URL}/{service.id}/image",
            files={"file": ("cover.png", b"\x89PNG fake", "image/png")},
            headers=admin_headers,
        )

    assert response.status_code == 200
    assert response.json()["image_url"] == expected_url
    upload.assert_called_once_with(
        f"services/{service.id}/cover.png", b"\x89PNG fake", "image/png"
    )


def test_upload_replaces_previous_image(client, db_session, admin_headers):
    (service,) = persist(db_session, build_service(name="Rug cleaning"))
    service.image_url = f"{STORAGE_URL}/services/{service.id}/cover.jpg"
    persist(db_session, service)

    with patch("app.services.catalog_service.upload_to_storage", return_value="new-url"), patch(
        "app.services.catalog_service.delete_public_url"
    ) as delete:
        client.post(
            f"{SERVICES_URL}/{service.id}/image",
            files={"file": ("cover.webp", b"RIFF", "image/webp")},
            headers=admin_headers,
        )

    delete.assert_called_once_with(f"{STORAGE_URL}/services/{service.id}/cover.jpg")


def test_upload_rejects_unsupported_type(client, db_session, admin_headers):
    (service,) = persist(db_session, build_service())

    response = client.post(
        f"{SERVICES_URL}/{service.id}/image",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_extract_path_from_public_url():
    assert extract_path_from_public_url(f"{STORAGE_URL}/services/abc/cover.png") == "services/abc/cover.png"
    assert extract_path_from_public_url("https://cdn.example.com/cover.png") is None
    assert extract_path_from_public_url(f"{STORAGE_URL}/") is None


def test_upload_to_storage_upserts_into_configured_bucket():
    with patch("app.core.storage_utils.storage_bucket") as bucket_factory:
        bucket = bucket_factory.return_value
        bucket.get_public_url.return_value = f"{STORAGE_URL}/services/s/cover.png"

        url = upload_to_storage("services/s/cover.png", b"png", "image/png")

    assert url == f"{STORAGE_URL}/services/s/cover.png"
    bucket.upload.assert_called_once_with(
        "services/s/cover.png", b"png", {"upsert": "true", "content-type": "image/png"}
    )


def test_delete_public_url_ignores_foreign_urls():
    with patch("app.core.storage_utils.storage_bucket") as bucket_factory:
        delete_public_url("https://cdn.example.com/cover.png")
        delete_public_url(f"{STORAGE_URL}/services/s/cover.png")

    bucket_factory.return_value.remove.assert_called_once_with(["services/s/cover.png"])


def test_rename_to_short_name_fails_validation(client, db_session, admin_headers):
    (duvet,) = persist(db_session, build_service(name="Duvet wash"))

    response = client.patch(
        f"{SERVICES_URL}/{duvet.id}",
        json={"name": " ab "},
        headers=admin_headers,
    )

    assert response.status_code == 422
