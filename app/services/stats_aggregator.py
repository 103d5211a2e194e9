# app/services/stats_aggregator.py
"""
In-memory aggregation behind the admin dashboard.

Everything here is a pure function of its arguments: the caller fetches
orders, users and services in bulk and passes them in together with a
StatsQuery. Nothing is cached between calls and inputs are never mutated.
"""
import logging
import math
import uuid
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone

from app.models.order import Order
from app.models.service import Service
from app.models.user import User
from app.schemas.stats import (
    DashboardStats,
    RecentOrder,
    RevenuePoint,
    ServiceStats,
    SignupPoint,
    StatsQuery,
    UserAnalytics,
    UserAnalyticsPage,
)

logger = logging.getLogger(__name__)

ORDER_STATUSES: tuple[str, ...] = ("pending", "in_progress", "completed", "cancelled")
GRANULARITIES: tuple[str, ...] = ("weekly", "monthly", "yearly")

TOP_SERVICES_LIMIT = 5
TOP_USERS_LIMIT = 5
RECENT_ORDERS_LIMIT = 10
USER_PAGE_SIZE = 10

# Locale-neutral labels; translation happens in the frontend.
MONTH_LABELS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

WEEK = timedelta(days=7)


class InvalidGranularityError(ValueError):
    """Raised when the requested time bucket width is not recognized."""

    def __init__(self, granularity: str):
        self.granularity = granularity
        super().__init__(
            f"Unknown granularity {granularity!r}; expected one of "
            f"{', '.join(GRANULARITIES)}"
        )


# ----- Helpers -----


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _week_start(now: datetime) -> datetime:
    """Monday 00:00 UTC of the week containing `now`."""
    now = _as_utc(now)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=midnight.weekday())


def _bucket_key(
    moment: datetime,
    granularity: str,
    week_start: datetime,
) -> tuple[tuple[int, int], str, int, int | None]:
    """
    Map an instant to (sort_key, label, index, year) for the granularity.

    Monthly buckets are keyed by (year, month) so January 2023 and
    January 2024 stay separate.
    """
    moment = _as_utc(moment)
    if granularity == "weekly":
        week = (moment - week_start) // WEEK + 1
        return (0, week), f"Week {week}", week, None
    if granularity == "monthly":
        return (moment.year, moment.month), MONTH_LABELS[moment.month - 1], moment.month, moment.year
    return (moment.year, 0), str(moment.year), moment.year, moment.year


def validate_granularity(granularity: str) -> str:
    if granularity not in GRANULARITIES:
        raise InvalidGranularityError(granularity)
    return granularity


# ----- Filtering -----


def filter_orders(
    orders: Iterable[Order],
    users_by_id: dict[uuid.UUID, User],
    services_by_id: dict[uuid.UUID, Service],
    status: str = "all",
    search: str = "",
) -> list[Order]:
    """
    Apply the status filter, then a case-insensitive substring search over
    order id, user name, service name and status. The term is matched
    literally, surrounding whitespace included.

    Orders whose user or service no longer exists are matched against an
    empty name; they are never dropped for that reason alone.
    """
    filtered = [o for o in orders if status == "all" or o.status == status]

    if not search:
        return filtered
    term = search.lower()

    matched: list[Order] = []
    for order in filtered:
        user = users_by_id.get(order.user_id)
        service = services_by_id.get(order.service_id)
        haystack = (
            str(order.id).lower(),
            user.name.lower() if user else "",
            service.name.lower() if service else "",
            order.status.lower(),
        )
        if any(term in field for field in haystack):
            matched.append(order)
    return matched


# ----- Series -----


def _revenue_series(
    orders: Sequence[Order],
    granularity: str,
    week_start: datetime,
) -> list[RevenuePoint]:
    buckets: dict[tuple[int, int], RevenuePoint] = {}
    for order in orders:
        if order.status != "completed":
            continue
        key, label, index, year = _bucket_key(order.created_at, granularity, week_start)
        point = buckets.get(key)
        if point is None:
            point = RevenuePoint(label=label, index=index, year=year, revenue=0.0)
            buckets[key] = point
        point.revenue += order.total_price
    return [buckets[k] for k in sorted(buckets)]


def _signup_series(
    users: Sequence[User],
    granularity: str,
    week_start: datetime,
) -> list[SignupPoint]:
    buckets: dict[tuple[int, int], SignupPoint] = {}
    for user in users:
        key, label, index, year = _bucket_key(user.created_at, granularity, week_start)
        point = buckets.get(key)
        if point is None:
            point = SignupPoint(label=label, index=index, year=year, users=0)
            buckets[key] = point
        point.users += 1
    return [buckets[k] for k in sorted(buckets)]


# ----- Main entry point -----


def compute_dashboard_stats(
    orders: Sequence[Order],
    users: Sequence[User],
    services: Sequence[Service],
    query: StatsQuery,
    now: datetime | None = None,
) -> DashboardStats | None:
    """
    Build the dashboard view model from full, unfiltered collections.

    Returns None when any collection is empty so the caller can show an
    empty/loading state instead of a dashboard full of zeros.

    Raises:
        InvalidGranularityError: if query.granularity is not recognized.
    """
    granularity = validate_granularity(query.granularity)

    if not orders or not users or not services:
        return None

    week_start = _week_start(now or datetime.now(timezone.utc))

    users_by_id = {u.id: u for u in users}
    services_by_id = {s.id: s for s in services}

    filtered = filter_orders(
        orders,
        users_by_id,
        services_by_id,
        status=query.status,
        search=query.search,
    )

    # Per-service / per-user fold, zero-filled for every known row
    service_stats: dict[uuid.UUID, ServiceStats] = {
        s.id: ServiceStats(service_id=s.id, name=s.name, is_active=s.is_active)
        for s in services
    }
    user_analytics: dict[uuid.UUID, UserAnalytics] = {
        u.id: UserAnalytics(user_id=u.id, name=u.name, email=u.email)
        for u in users
    }
    status_distribution: dict[str, int] = {s: 0 for s in ORDER_STATUSES}

    total_revenue = 0.0
    gross = 0.0

    for order in filtered:
        gross += order.total_price
        if order.status == "completed":
            total_revenue += order.total_price
        status_distribution[order.status] += 1

        s_stats = service_stats.get(order.service_id)
        if s_stats is not None:
            s_stats.order_count += 1
            if order.status == "completed":
                s_stats.completed_count += 1
                s_stats.total_revenue += order.total_price
            elif order.status == "pending":
                s_stats.pending_count += 1

        u_stats = user_analytics.get(order.user_id)
        if u_stats is not None:
            u_stats.order_count += 1
            u_stats.total_spent += order.total_price
            created = _as_utc(order.created_at)
            if u_stats.last_order_at is None or created > u_stats.last_order_at:
                u_stats.last_order_at = created

    service_rows = list(service_stats.values())
    user_rows = list(user_analytics.values())

    # sorted() is stable, also with reverse=True
    top_services = sorted(service_rows, key=lambda s: s.order_count, reverse=True)
    top_users = sorted(user_rows, key=lambda u: u.total_spent, reverse=True)
    newest_first = sorted(filtered, key=lambda o: _as_utc(o.created_at), reverse=True)

    recent_orders: list[RecentOrder] = []
    for order in newest_first[:RECENT_ORDERS_LIMIT]:
        user = users_by_id.get(order.user_id)
        service = services_by_id.get(order.service_id)
        recent_orders.append(
            RecentOrder(
                id=order.id,
                user_id=order.user_id,
                service_id=order.service_id,
                user_name=user.name if user else "",
                service_name=service.name if service else "",
                status=order.status,
                quantity=order.quantity,
                total_price=order.total_price,
                created_at=order.created_at,
                pickup_date=order.pickup_date,
            )
        )

    total_orders = len(filtered)
    total_users = len(users)

    logger.debug(
        "Computed dashboard stats: %d/%d orders matched (status=%s, granularity=%s)",
        total_orders,
        len(orders),
        query.status,
        granularity,
    )

    return DashboardStats(
        granularity=granularity,
        locale=query.locale,
        total_orders=total_orders,
        total_users=total_users,
        total_services=len(services),
        completed_orders=status_distribution["completed"],
        pending_orders=status_distribution["pending"],
        total_revenue=total_revenue,
        avg_order_value=gross / total_orders if total_orders else 0.0,
        conversion_rate=total_orders / total_users * 100 if total_users else 0.0,
        status_distribution=status_distribution,
        revenue_by_period=_revenue_series(filtered, granularity, week_start),
        user_signups_by_period=_signup_series(users, granularity, week_start),
        service_stats=service_rows,
        user_analytics=user_rows,
        top_services=top_services[:TOP_SERVICES_LIMIT],
        top_users=top_users[:TOP_USERS_LIMIT],
        recent_orders=recent_orders,
    )


# ----- Pagination -----


def paginate_user_analytics(
    user_analytics: Sequence[UserAnalytics],
    page: int,
    page_size: int = USER_PAGE_SIZE,
) -> UserAnalyticsPage:
    """
    Return the 1-based `page` of user analytics.

    The caller clamps `page` into [1, total_pages]; out-of-range pages
    simply yield an empty slice.
    """
    total = len(user_analytics)
    start = (page - 1) * page_size
    return UserAnalyticsPage(
        items=list(user_analytics[start : start + page_size]),
        page=page,
        page_size=page_size,
        total=total,
        total_pages=math.ceil(total / page_size),
    )
