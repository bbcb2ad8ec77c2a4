"""
Feature Extraction Logic
SINGLE SOURCE OF TRUTH for the model input layout
Used by both:
- Seeding (jobs/seed_store.py writes the fields)
- Serving (FastAPI reads them back and builds the vector)

Layout: [v0, v1, ..., v27, log(amount)]
"""

import logging
import math
from typing import Any, Mapping, Tuple, Union

from .constants import (
    COMPONENT_PREFIX,
    DEFAULT_FEATURE_VALUE,
    FEATURE_VECTOR_LENGTH,
    LABEL_FIELD,
    VALID_LABELS,
)
from .entities import FeatureRecord, FeatureVector, MissingLabelError

logger = logging.getLogger(__name__)


class FeatureEngineering:
    """Feature extraction for fraud scoring"""

    @staticmethod
    def component_fields(vector_length: int = FEATURE_VECTOR_LENGTH) -> Tuple[str, ...]:
        """Explicit component field names: v0 .. v{n-2} (last slot is the amount)"""
        if vector_length < 1:
            raise ValueError(f"vector_length must be >= 1, got {vector_length}")
        return tuple(f"{COMPONENT_PREFIX}{i}" for i in range(vector_length - 1))

    @staticmethod
    def ground_truth(record: FeatureRecord) -> str:
        """
        Read the classification label

        Raises:
            MissingLabelError: label absent, not a string, or not "0"/"1"
        """
        label = record.label
        if label is None:
            raise MissingLabelError(f"record has no {LABEL_FIELD} field")
        if not isinstance(label, str):
            raise MissingLabelError(
                f"{LABEL_FIELD} must be a string, got {type(label).__name__}"
            )

        label = label.strip()
        if label not in VALID_LABELS:
            raise MissingLabelError(f"{LABEL_FIELD} must be one of {VALID_LABELS}, got {label!r}")
        return label

    @staticmethod
    def log_amount(record: FeatureRecord, default: float = DEFAULT_FEATURE_VALUE) -> float:
        """
        Natural log of the stored amount

        Amounts that are missing, non-numeric or <= 0 have no logarithm:
        the slot gets `default` instead of -inf/NaN.
        """
        amount = record.amount_value(0.0)
        if amount <= 0:
            logger.warning(f"⚠️ Amount {record.amount!r} has no log, using {default}")
            return default
        return math.log(amount)

    @classmethod
    def extract(
        cls,
        record: Union[FeatureRecord, Mapping[str, Any]],
        vector_length: int = FEATURE_VECTOR_LENGTH,
        default: float = DEFAULT_FEATURE_VALUE
    ) -> Tuple[str, FeatureVector]:
        """
        Build (ground truth, feature vector) from a stored record

        Args:
            record: FeatureRecord or raw field mapping from the store
            vector_length: total slots (components + amount)
            default: value for absent / non-numeric fields

        Returns:
            (label, vector) where len(vector) == vector_length
        """
        if not isinstance(record, FeatureRecord):
            record = FeatureRecord.from_fields(record)

        label = cls.ground_truth(record)

        values = [record.number(name, default) for name in cls.component_fields(vector_length)]
        values.append(cls.log_amount(record, default))

        return label, FeatureVector(values, length=vector_length)


def extract(
    record: Union[FeatureRecord, Mapping[str, Any]],
    vector_length: int = FEATURE_VECTOR_LENGTH,
    default: float = DEFAULT_FEATURE_VALUE
) -> Tuple[str, FeatureVector]:
    """Module-level shortcut for FeatureEngineering.extract"""
    return FeatureEngineering.extract(record, vector_length, default)
