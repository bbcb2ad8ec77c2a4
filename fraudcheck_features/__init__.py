"""
FraudCheck Feature Contract
Shared feature layout between store seeding and serving
"""

from .features import FeatureEngineering, extract
from .entities import FeatureRecord, FeatureVector, MissingLabelError, to_number
from .constants import (
    FEATURE_VECTOR_LENGTH,
    FRAUD_THRESHOLD,
    LABEL_FIELD,
    AMOUNT_FIELD,
)

__all__ = [
    "FeatureEngineering",
    "extract",
    "FeatureRecord",
    "FeatureVector",
    "MissingLabelError",
    "to_number",
    "FEATURE_VECTOR_LENGTH",
    "FRAUD_THRESHOLD",
    "LABEL_FIELD",
    "AMOUNT_FIELD",
]
