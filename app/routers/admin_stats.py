# app/routers/admin_stats.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.stats_repo import StatsRepository
from app.schemas.order import StatusFilter
from app.schemas.stats import DashboardStats, StatsQuery, UserAnalyticsPage
from app.services.stats_service import StatsService

router = APIRouter(
    prefix="/admin/stats",
    tags=["Admin Stats"],
    dependencies=[Depends(require_admin)],
)

repo = StatsRepository()
service = StatsService(repo)


@router.get("", response_model=DashboardStats | None)
def get_admin_dashboard_stats(
    status: StatusFilter = "all",
    search: str = "",
    granularity: str = "monthly",
    locale: str = "en",
    session: Session = Depends(get_session),
):
    """
    Aggregated statistics for the admin dashboard.

    Query params (optional):
      - status: all | pending | in_progress | completed | cancelled
      - search: matched against order id, customer name, service name, status
      - granularity: weekly | monthly | yearly (anything else => 400)
      - locale: echoed back for display formatting

    Returns null while there are no orders, users or services yet.
    """
    query = StatsQuery(
        status=status,
        search=search,
        granularity=granularity,
        locale=locale,
    )
    return service.get_admin_dashboard_stats(session, query)


@router.get("/users", response_model=UserAnalyticsPage | None)
def get_user_analytics_page(
    page: int = 1,
    status: StatusFilter = "all",
    search: str = "",
    session: Session = Depends(get_session),
):
    """
    Paginated per-customer analytics (10 per page).

    Out-of-range pages are clamped to the nearest valid page.
    """
    query = StatsQuery(status=status, search=search)
    return service.get_user_analytics_page(session, query, page=page)
