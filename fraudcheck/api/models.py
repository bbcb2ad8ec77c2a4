# fraudcheck/api/models.py

from datetime import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fraudcheck_features.constants import AMOUNT_FIELD, SET_NAME_FIELD, USER_ID_FIELD
from fraudcheck_features.entities import FeatureVector


# ============================================================================
# Inbound transaction
# ============================================================================

class IncomingTransaction(BaseModel):
    """
    Transaction posted to the gateway
    Missing fields fall back to zero values, wrong types are rejected
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: str = Field(default="", alias="Timestamp")
    amount: float = Field(default=0.0, alias="Amount")
    user_id: str = Field(default="", alias="UserID")
    cc_num_hash: str = Field(default="", alias="CCNumHash")
    seller_id: int = Field(default=0, alias="SellerID")
    item_id: int = Field(default=0, alias="ItemID")

    def to_store_fields(self, set_name: str) -> Dict[str, Any]:
        """Subset persisted on accept (keyed by seller)"""
        return {
            USER_ID_FIELD: self.user_id,
            SET_NAME_FIELD: set_name,
            AMOUNT_FIELD: self.amount,
        }


# ============================================================================
# Model server contract
# ============================================================================

class PredictionRequest(BaseModel):
    """Body sent to the model server: one row of features"""
    inputs: List[List[float]]

    @classmethod
    def from_vector(cls, vector: FeatureVector) -> "PredictionRequest":
        return cls(inputs=vector.as_batch())


class PredictionResponse(BaseModel):
    """Body returned by the model server: one row, one probability in [0, 1]"""
    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    outputs: List[List[float]]

    @field_validator("outputs")
    @classmethod
    def single_probability(cls, outputs: List[List[float]]) -> List[List[float]]:
        if len(outputs) != 1 or len(outputs[0]) != 1:
            shape = [len(row) for row in outputs]
            raise ValueError(f"expected outputs shaped [[p]], got row lengths {shape}")
        if not 0.0 <= outputs[0][0] <= 1.0:
            raise ValueError(f"probability must be within [0, 1], got {outputs[0][0]}")
        return outputs

    @property
    def probability(self) -> float:
        return self.outputs[0][0]


# ============================================================================
# Validation outcome
# ============================================================================

class ValidationOutcome(BaseModel):
    """Ground truth vs model verdict for one transaction"""
    ground_truth: str
    predicted: str
    matched: bool


# ============================================================================
# Health Check
# ============================================================================

class HealthResponse(BaseModel):
    status: str
    store: str
    scoring_url: str
    fraud_threshold: float
    timestamp: datetime
