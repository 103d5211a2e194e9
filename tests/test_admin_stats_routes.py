"""
Tests for /admin/stats routes.
"""

from datetime import datetime, timezone

from tests.utils.factories import build_order, build_service, persist

STATS_URL = "/api/v1/admin/stats"


def seed_orders(db_session, customer):
    shirt, suit = persist(
        db_session,
        build_service(name="Shirt laundering", price=20.0),
        build_service(name="Suit dry-clean", price=15.0),
    )
    persist(
        db_session,
        build_order(
            customer.id, shirt.id, status="completed", quantity=2, total_price=40.0,
            created_at=datetime(2024, 1, 10, tzinfo=timezone.utc),
        ),
        build_order(
            customer.id, suit.id, status="pending", quantity=1, total_price=15.0,
            created_at=datetime(2024, 2, 5, tzinfo=timezone.utc),
        ),
    )
    return shirt, suit


def test_requires_authentication(client):
    response = client.get(STATS_URL)

    assert response.status_code == 401


def test_customer_is_forbidden(client, customer_headers):
    response = client.get(STATS_URL, headers=customer_headers)

    assert response.status_code == 403


def test_empty_dataset_returns_null(client, admin_headers):
    response = client.get(STATS_URL, headers=admin_headers)

    assert response.status_code == 200
    assert response.json() is None


def test_dashboard_payload(client, db_session, customer, admin_headers):
    seed_orders(db_session, customer)

    response = client.get(STATS_URL, headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total_orders"] == 2
    assert data["total_users"] == 2  # customer + admin
    assert data["total_revenue"] == 40.0
    assert data["avg_order_value"] == 27.5
    assert data["status_distribution"] == {
        "pending": 1,
        "in_progress": 0,
        "completed": 1,
        "cancelled": 0,
    }
    assert [p["label"] for p in data["revenue_by_period"]] == ["Jan"]
    assert data["recent_orders"][0]["service_name"] == "Suit dry-clean"


def test_status_and_search_params(client, db_session, customer, admin_headers):
    seed_orders(db_session, customer)

    completed = client.get(STATS_URL, params={"status": "completed"}, headers=admin_headers).json()
    searched = client.get(STATS_URL, params={"search": "AMIR"}, headers=admin_headers).json()

    assert completed["total_orders"] == 1
    assert searched["total_orders"] == 2


def test_unknown_granularity_is_400(client, db_session, customer, admin_headers):
    seed_orders(db_session, customer)

    response = client.get(STATS_URL, params={"granularity": "daily"}, headers=admin_headers)

    assert response.status_code == 400
    assert "granularity" in response.json()["detail"].lower()


def test_unknown_status_is_422(client, admin_headers):
    response = client.get(STATS_URL, params={"status": "lost"}, headers=admin_headers)

    assert response.status_code == 422


def test_user_analytics_page(client, db_session, customer, admin_headers):
    seed_orders(db_session, customer)

    response = client.get(f"{STATS_URL}/users", params={"page": 7}, headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["page"] == 1
    assert data["total"] == 2
    amir = next(row for row in data["items"] if row["name"] == "Amir")
    assert amir["order_count"] == 2
    assert amir["total_spent"] == 55.0
