"""Health Probe — liveness plus a summary of the configured backend and mail transport.

Invariants:
    - GET /api/health always returns 200 if the process is up
    - Reports configuration only; never touches the backend or the SMTP relay
"""

from fastapi import APIRouter, Depends

from intake.api.dependencies import enforce_api_rate_limit, get_services
from intake.schemas.submission import HealthResponse
from intake.services.container import IntakeServices
from intake.services.submission_service import utc_timestamp

router = APIRouter(
    prefix="/api/health", tags=["health"],
    dependencies=[Depends(enforce_api_rate_limit)],
)


@router.get("", response_model=HealthResponse)
async def health_check(services: IntakeServices = Depends(get_services)):
    return HealthResponse(
        status="OK",
        timestamp=utc_timestamp(),
        env=services.settings.app_env,
        storage=services.store.backend_label,
        email="configured" if services.notifier.configured else "not configured",
    )
