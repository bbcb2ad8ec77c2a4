"""
Scoring route - single entry point, any HTTP method
"""
from fastapi import APIRouter, Depends, Request, Response

from fraudcheck.services.scoring_service import ScoringService

score_router = APIRouter(tags=["score"])

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD", "TRACE"]


# Dependency to get service
def get_scoring_service(request: Request) -> ScoringService:
    """Build the pipeline from the shared store + prediction client"""
    state = request.app.state
    return ScoringService(state.store, state.predictor, state.settings)


@score_router.api_route("/", methods=ALL_METHODS)
async def score(request: Request, service: ScoringService = Depends(get_scoring_service)):
    """
    Score a transaction and validate the verdict against ground truth

    Body: {"Timestamp", "Amount", "UserID", "CCNumHash", "SellerID", "ItemID"}
    Success is an empty 200, failures are 400 text/plain (see main.py)
    """
    body = await request.body()
    await service.run(body)
    return Response(status_code=200)
