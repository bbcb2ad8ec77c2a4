from .prediction_client import PredictionClient, decide
from .outcome_validator import validate_prediction, build_outcome
from .scoring_service import ScoringService, PipelineStage, parse_transaction

__all__ = [
    "PredictionClient",
    "decide",
    "validate_prediction",
    "build_outcome",
    "ScoringService",
    "PipelineStage",
    "parse_transaction",
]
