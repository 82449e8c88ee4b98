from fastapi import APIRouter, Depends

from poolcare.core.security import get_current_user
from poolcare.models.user import User
from poolcare.schemas.observability import ObservabilityMetricsResponse
from poolcare.services.observability import observability_tracker

router = APIRouter(prefix="/observability", tags=["observability"])


@router.get("/metrics", response_model=ObservabilityMetricsResponse)
def get_metrics(current_user: User = Depends(get_current_user)) -> ObservabilityMetricsResponse:
    _ = current_user
    return ObservabilityMetricsResponse(**observability_tracker.snapshot())
