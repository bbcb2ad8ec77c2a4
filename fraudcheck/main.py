# fraudcheck/main.py

"""
FastAPI Scoring Gateway
- Scoring entry point (any method on /): persist -> enrich -> predict -> validate
- Health check (GET /health)
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from fraudcheck.config import Settings, setup_logging
from fraudcheck.database.redis_client import BaseFeatureStore, RedisFeatureStore
from fraudcheck.errors import CLIENT_ERRORS
from fraudcheck.routes.health_router import health_router
from fraudcheck.routes.score_router import score_router
from fraudcheck.services.prediction_client import PredictionClient

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[BaseFeatureStore] = None,
    predictor: Optional[PredictionClient] = None
) -> FastAPI:
    """
    Build the gateway app

    Store and prediction client are created at startup unless injected;
    whatever is created here is closed on shutdown. A store that cannot be
    reached at startup aborts the process.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned_store = store is None
        owned_predictor = predictor is None

        app.state.settings = settings
        app.state.store = store if not owned_store else await RedisFeatureStore.connect(settings)
        app.state.predictor = predictor if not owned_predictor else PredictionClient(
            settings.scoring_url,
            timeout=settings.timeout_sec,
            threshold=settings.fraud_threshold
        )
        logger.info(f"✅ Scoring gateway ready (model server: {settings.scoring_url})")

        try:
            yield
        finally:
            if owned_predictor:
                await app.state.predictor.close()
            if owned_store:
                await app.state.store.close()

    app = FastAPI(
        title="FraudCheck Scoring Gateway",
        description="Feature enrichment + model scoring + ground-truth validation",
        version="1.0.0",
        lifespan=lifespan
    )

    async def pipeline_error_handler(request: Request, exc: Exception):
        return PlainTextResponse(str(exc), status_code=400)

    for error_class in CLIENT_ERRORS:
        app.add_exception_handler(error_class, pipeline_error_handler)

    app.include_router(health_router)
    app.include_router(score_router)

    return app


def main():
    """Run the gateway with uvicorn"""
    import uvicorn

    settings = Settings.from_env()
    setup_logging(settings.log_level)
    logger.info(f"Listening on {settings.api_host}:{settings.api_port}")
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
