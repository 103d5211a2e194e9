# app/services/stats_service.py
import math
from datetime import datetime

from fastapi import HTTPException, status
from sqlmodel import Session

from app.repositories.stats_repo import StatsRepository
from app.schemas.stats import DashboardStats, StatsQuery, UserAnalyticsPage
from app.services.stats_aggregator import (
    USER_PAGE_SIZE,
    InvalidGranularityError,
    compute_dashboard_stats,
    paginate_user_analytics,
)


class StatsService:
    """
    Orchestrates the admin dashboard: bulk-load the three tables, hand
    them to the aggregator and translate its errors into HTTP errors.
    """

    def __init__(self, repo: StatsRepository):
        self.repo = repo

    def get_admin_dashboard_stats(
        self,
        session: Session,
        query: StatsQuery,
        now: datetime | None = None,
    ) -> DashboardStats | None:
        """
        Returns None while there are no orders, users or services yet.
        """
        try:
            return compute_dashboard_stats(
                self.repo.all_orders(session),
                self.repo.all_users(session),
                self.repo.all_services(session),
                query,
                now=now,
            )
        except InvalidGranularityError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
            )

    def get_user_analytics_page(
        self,
        session: Session,
        query: StatsQuery,
        page: int = 1,
        page_size: int = USER_PAGE_SIZE,
    ) -> UserAnalyticsPage | None:
        """
        One page of the dashboard customer table.

        `page` is clamped into [1, total_pages] before slicing.
        """
        stats = self.get_admin_dashboard_stats(session, query)
        if stats is None:
            return None

        total_pages = max(1, math.ceil(len(stats.user_analytics) / page_size))
        page = min(max(page, 1), total_pages)
        return paginate_user_analytics(stats.user_analytics, page, page_size)
