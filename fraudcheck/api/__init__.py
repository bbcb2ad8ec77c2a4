"""
FraudCheck API Models
- IncomingTransaction (gateway input)
- PredictionRequest / PredictionResponse (model server contract)
- ValidationOutcome, HealthResponse
"""

from .models import (
    IncomingTransaction,
    PredictionRequest,
    PredictionResponse,
    ValidationOutcome,
    HealthResponse,
)

__all__ = [
    "IncomingTransaction",
    "PredictionRequest",
    "PredictionResponse",
    "ValidationOutcome",
    "HealthResponse",
]
