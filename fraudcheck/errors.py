"""
Gateway error taxonomy
Every pipeline failure maps to a 400 with the message as plain text
"""
from typing import Optional

from fraudcheck_features.entities import MissingLabelError


class FraudCheckError(Exception):
    """Base for all client-visible pipeline failures"""

    status_code = 400

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage


class BadRequestError(FraudCheckError):
    """Inbound transaction body could not be decoded"""


class StorageError(FraudCheckError):
    """Store connect / read / write failure, including record not found"""


class PredictionServiceError(FraudCheckError):
    """Model server transport failure, timeout or malformed response"""

    def __init__(self, message: str, stage: Optional[str] = None, timed_out: bool = False):
        super().__init__(message, stage)
        self.timed_out = timed_out


# Errors the route layer turns into 400 responses
CLIENT_ERRORS = (FraudCheckError, MissingLabelError)

__all__ = [
    "FraudCheckError",
    "BadRequestError",
    "StorageError",
    "PredictionServiceError",
    "MissingLabelError",
    "CLIENT_ERRORS",
]
