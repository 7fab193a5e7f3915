"""Health check with a database round trip."""

from fastapi import APIRouter

from app.api.guards import Container, DbSession
from app.core.database import check_db_connected
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: DbSession, container: Container) -> HealthResponse:
    """Used by load balancers; always 200, with status "degraded" if the database is down."""
    connected = check_db_connected(db)
    return HealthResponse(
        status="ok" if connected else "degraded",
        environment=container.settings.APP_ENV,
        database="connected" if connected else "disconnected",
    )
