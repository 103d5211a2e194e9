# app/schemas/stats.py
import uuid
from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel

from app.schemas.order import OrderStatus, StatusFilter


class StatsQuery(SQLModel):
    """
    Parameters for one dashboard computation.

    `granularity` is a plain string on purpose: the aggregator rejects
    unknown values itself instead of falling back to a default.
    `locale` is only echoed back for the consumer's formatting.
    """
    model_config = ConfigDict(extra="forbid")

    status: StatusFilter = "all"
    search: str = ""
    granularity: str = "monthly"
    locale: str = "en"


class PeriodBucket(SQLModel):
    """
    One point of a time series.

    - weekly:  label "Week N", index N, year None
    - monthly: label "Jan".."Dec", index 1-12, year set
    - yearly:  label "2024", index 2024, year 2024
    """
    model_config = ConfigDict(extra="forbid")

    label: str
    index: int
    year: int | None = None


class RevenuePoint(PeriodBucket):
    revenue: float


class SignupPoint(PeriodBucket):
    users: int


class ServiceStats(SQLModel):
    """
    Per-service totals over the filtered order set.
    total_revenue only counts completed orders.
    """
    model_config = ConfigDict(extra="forbid")

    service_id: uuid.UUID
    name: str
    is_active: bool
    order_count: int = 0
    total_revenue: float = 0.0
    pending_count: int = 0
    completed_count: int = 0


class UserAnalytics(SQLModel):
    """
    Per-user totals over the filtered order set.
    total_spent sums every filtered order regardless of status.
    """
    model_config = ConfigDict(extra="forbid")

    user_id: uuid.UUID
    name: str
    email: str
    order_count: int = 0
    total_spent: float = 0.0
    last_order_at: datetime | None = None


class RecentOrder(SQLModel):
    """
    Order row with resolved names. Unknown users/services resolve to "".
    """
    model_config = ConfigDict(extra="forbid")

    id: uuid.UUID
    user_id: uuid.UUID
    service_id: uuid.UUID
    user_name: str
    service_name: str
    status: OrderStatus
    quantity: int
    total_price: float
    created_at: datetime
    pickup_date: datetime


class DashboardStats(SQLModel):
    """
    Full payload for the admin dashboard.
    """
    model_config = ConfigDict(extra="forbid")

    granularity: str
    locale: str

    total_orders: int
    total_users: int
    total_services: int
    completed_orders: int
    pending_orders: int

    total_revenue: float
    avg_order_value: float
    conversion_rate: float

    status_distribution: dict[OrderStatus, int]
    revenue_by_period: list[RevenuePoint]
    user_signups_by_period: list[SignupPoint]

    service_stats: list[ServiceStats]
    user_analytics: list[UserAnalytics]
    top_services: list[ServiceStats]
    top_users: list[UserAnalytics]
    recent_orders: list[RecentOrder]


class UserAnalyticsPage(SQLModel):
    """
    One page of user analytics for the dashboard customer table.
    """
    model_config = ConfigDict(extra="forbid")

    items: list[UserAnalytics]
    page: int
    page_size: int
    total: int
    total_pages: int
