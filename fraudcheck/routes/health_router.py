"""
Health check route
"""
from datetime import datetime

from fastapi import APIRouter, Request

from fraudcheck.api.models import HealthResponse

health_router = APIRouter(tags=["health"])


@health_router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    """System health check"""
    state = request.app.state
    store_ok = await state.store.ping()
    return HealthResponse(
        status="healthy" if store_ok else "degraded",
        store="connected" if store_ok else "unreachable",
        scoring_url=state.settings.scoring_url,
        fraud_threshold=state.settings.fraud_threshold,
        timestamp=datetime.now()
    )
