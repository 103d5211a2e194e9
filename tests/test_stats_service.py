"""
Tests for StatsService - repository orchestration and HTTP error mapping.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from app.repositories.stats_repo import StatsRepository
from app.schemas.stats import StatsQuery
from app.services.stats_service import StatsService
from tests.utils.factories import build_order, build_service, build_user


def create_service_with(orders, users, services) -> StatsService:
    repo = MagicMock(spec=StatsRepository)
    repo.all_orders.return_value = orders
    repo.all_users.return_value = users
    repo.all_services.return_value = services
    return StatsService(repo)


@pytest.fixture
def dataset():
    shirt = build_service(name="Shirt laundering")
    users = [build_user(name=f"Customer {i:02d}") for i in range(23)]
    orders = [
        build_order(u.id, shirt.id, total_price=10.0 + i, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        for i, u in enumerate(users)
    ]
    return orders, users, [shirt]


def test_returns_dashboard_from_repository_rows(dataset):
    service = create_service_with(*dataset)

    stats = service.get_admin_dashboard_stats(MagicMock(), StatsQuery())

    assert stats.total_orders == 23
    assert stats.total_users == 23
    service.repo.all_orders.assert_called_once()


def test_invalid_granularity_maps_to_400(dataset):
    service = create_service_with(*dataset)

    with pytest.raises(HTTPException) as exc_info:
        service.get_admin_dashboard_stats(MagicMock(), StatsQuery(granularity="daily"))

    assert exc_info.value.status_code == 400
    assert "daily" in exc_info.value.detail


def test_empty_tables_return_none():
    service = create_service_with([], [], [])

    assert service.get_admin_dashboard_stats(MagicMock(), StatsQuery()) is None
    assert service.get_user_analytics_page(MagicMock(), StatsQuery()) is None


@pytest.mark.parametrize(
    ("requested", "expected_page", "expected_len"),
    [(1, 1, 10), (3, 3, 3), (0, 1, 10), (-5, 1, 10), (99, 3, 3)],
)
def test_user_page_is_clamped(dataset, requested, expected_page, expected_len):
    service = create_service_with(*dataset)

    page = service.get_user_analytics_page(MagicMock(), StatsQuery(), page=requested)

    assert page.page == expected_page
    assert len(page.items) == expected_len
    assert page.total_pages == 3
