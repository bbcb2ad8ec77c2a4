"""
Scoring Service - per-request pipeline
accept -> persist -> enrich -> predict -> validate
"""
import json
import logging
from enum import Enum
from typing import Tuple

from pydantic import ValidationError

from fraudcheck.api.models import IncomingTransaction, ValidationOutcome
from fraudcheck.config import Settings
from fraudcheck.database.redis_client import BaseFeatureStore
from fraudcheck.errors import BadRequestError, CLIENT_ERRORS, StorageError
from fraudcheck.services.outcome_validator import build_outcome
from fraudcheck.services.prediction_client import PredictionClient
from fraudcheck_features.entities import FeatureVector
from fraudcheck_features.features import FeatureEngineering

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    """Last stage a request completed (failures keep the stage they stopped at)"""
    RECEIVED = "received"
    PERSISTED = "persisted"
    ENRICHED = "enriched"
    PREDICTED = "predicted"
    VALIDATED = "validated"


def parse_transaction(body: bytes) -> IncomingTransaction:
    """
    Decode the request body

    Raises:
        BadRequestError: not JSON, not an object, or a field has the wrong type
    """
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise BadRequestError(f"invalid transaction JSON: {e}") from e

    if not isinstance(data, dict):
        raise BadRequestError("transaction must be a JSON object")

    try:
        return IncomingTransaction.model_validate(data, strict=True)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise BadRequestError(f"invalid transaction fields: {fields}") from e


class ScoringService:
    """Runs one transaction through the scoring pipeline"""

    def __init__(self, store: BaseFeatureStore, predictor: PredictionClient, settings: Settings):
        self.store = store
        self.predictor = predictor
        self.settings = settings

    async def accept(self, txn: IncomingTransaction) -> None:
        """Persist the transaction subset, keyed by seller"""
        await self.store.put(
            self.settings.namespace,
            self.settings.set_name,
            txn.seller_id,
            txn.to_store_fields(self.settings.set_name)
        )

    async def enrich(self, txn: IncomingTransaction) -> Tuple[str, FeatureVector]:
        """
        Load the user's feature record and build the model input

        Reads by user id while accept() writes by seller id: the user-keyed
        records come from the seeding job, not from accept().
        """
        if not txn.user_id:
            raise StorageError("transaction has no UserID to look up")

        fields = await self.store.get(self.settings.namespace, self.settings.set_name, txn.user_id)
        return FeatureEngineering.extract(fields, vector_length=self.settings.feature_vector_length)

    async def run(self, body: bytes) -> ValidationOutcome:
        """
        Full pipeline for one request body

        Any failure is tagged with the stage it happened in and re-raised;
        nothing is retried.
        """
        stage = PipelineStage.RECEIVED
        try:
            txn = parse_transaction(body)
            await self.accept(txn)
            stage = PipelineStage.PERSISTED

            ground_truth, vector = await self.enrich(txn)
            stage = PipelineStage.ENRICHED

            predicted = await self.predictor.predict(vector)
            stage = PipelineStage.PREDICTED

            outcome = build_outcome(ground_truth, predicted)
            stage = PipelineStage.VALIDATED
        except CLIENT_ERRORS as e:
            e.stage = stage.value
            logger.warning(f"⚠️ Pipeline failed after {stage.value}: {e}")
            raise

        logger.info(
            f"✅ Scored user={txn.user_id} seller={txn.seller_id}: "
            f"truth={outcome.ground_truth} predicted={outcome.predicted} matched={outcome.matched}"
        )
        return outcome
