# fraudcheck/services/prediction_client.py

import asyncio
import logging
import time
from typing import Optional

import httpx
from pydantic import ValidationError

from fraudcheck.api.models import PredictionRequest, PredictionResponse
from fraudcheck.errors import PredictionServiceError
from fraudcheck_features.constants import FRAUD_LABEL, FRAUD_THRESHOLD, LEGIT_LABEL
from fraudcheck_features.entities import FeatureVector

logger = logging.getLogger(__name__)


def decide(probability: float, threshold: float = FRAUD_THRESHOLD) -> str:
    """Fraud only when strictly above the threshold"""
    return FRAUD_LABEL if probability > threshold else LEGIT_LABEL


class PredictionClient:
    """Client for the remote model server (TF-Serving style REST predict)"""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        threshold: float = FRAUD_THRESHOLD,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.url = url
        self.timeout = timeout
        self.threshold = threshold
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def score(self, vector: FeatureVector) -> float:
        """
        Send one feature row, return the fraud probability

        The whole round trip is bounded by `timeout`.

        Raises:
            PredictionServiceError: transport error, timeout, bad status or bad body
        """
        payload = PredictionRequest.from_vector(vector).model_dump()
        start = time.time()

        try:
            response = await asyncio.wait_for(
                self._http.post(
                    self.url,
                    json=payload,
                    headers={"Content-Type": "application/json"}
                ),
                timeout=self.timeout
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.error(f"❌ Model server timed out after {self.timeout}s")
            raise PredictionServiceError(
                f"prediction service timed out after {self.timeout}s", timed_out=True
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"❌ Model server request failed: {e}")
            raise PredictionServiceError(f"prediction service request failed: {e}") from e

        if response.is_error:
            raise PredictionServiceError(
                f"prediction service returned HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            prediction = PredictionResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise PredictionServiceError(f"invalid prediction response: {e}") from e

        logger.debug(f"⚡ Prediction time: {(time.time() - start) * 1000:.0f}ms")
        return prediction.probability

    async def predict(self, vector: FeatureVector) -> str:
        """Score the vector and reduce it to "1" (fraud) or "0" """
        probability = await self.score(vector)
        label = decide(probability, self.threshold)

        if label == FRAUD_LABEL:
            logger.info(f"🚨 Prediction is FRAUD (p={probability:.4f})")
        else:
            logger.info(f"✅ Prediction is NOT FRAUD (p={probability:.4f})")
        return label

    async def close(self):
        """Close the HTTP client if we created it"""
        if self._owns_client:
            await self._http.aclose()
