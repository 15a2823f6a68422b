"""
Dashboard Endpoints.
"""

from fastapi import APIRouter

from taskboard.core.database.repositories.stats import StatsRepository
from taskboard.core.models.io.stats import DashboardStats
from taskboard.server.services.deps import CurrentUserDep, DatastoreDep

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="Dashboard Statistics",
    description=(
        "Counts of the caller's tasks: total, completed, pending, high priority, and overdue "
        "(deadline passed and not completed)."
    ),
)
async def dashboard_stats(user_id: CurrentUserDep, datastore: DatastoreDep) -> DashboardStats:
    """
    Get dashboard statistics.

    The five counts are read concurrently; if any of them fails the request
    fails and no partial statistics are returned.
    """
    stats = await StatsRepository(datastore.session_factory).for_user(user_id)
    return DashboardStats(
        total_tasks=stats.total_tasks,
        completed_tasks=stats.completed_tasks,
        pending_tasks=stats.pending_tasks,
        high_priority_tasks=stats.high_priority_tasks,
        overdue_tasks=stats.overdue_tasks,
    )
