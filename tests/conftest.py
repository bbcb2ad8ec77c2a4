# tests/conftest.py

import json
import os
import sys
from typing import Any, Dict, List, Mapping

import httpx
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from fraudcheck.config import Settings
from fraudcheck.database.redis_client import BaseFeatureStore, make_key
from fraudcheck.errors import StorageError
from fraudcheck.services.prediction_client import PredictionClient

SCORING_URL = "http://model-server.test/v1/models/fraud:predict"


class InMemoryFeatureStore(BaseFeatureStore):
    """Dict-backed store with call recording"""

    def __init__(self, records: Dict[str, Dict[str, Any]] = None, fail_writes: bool = False):
        self.records = dict(records or {})
        self.fail_writes = fail_writes
        self.puts: List[tuple] = []
        self.gets: List[tuple] = []
        self.closed = False

    async def put(self, namespace: str, set_name: str, key, fields: Mapping[str, Any]) -> None:
        self.puts.append((namespace, set_name, key, dict(fields)))
        if self.fail_writes:
            raise StorageError("store write failed: connection refused")
        self.records.setdefault(make_key(namespace, set_name, key), {}).update(fields)

    async def get(self, namespace: str, set_name: str, key) -> Dict[str, Any]:
        self.gets.append((namespace, set_name, key))
        redis_key = make_key(namespace, set_name, key)
        if redis_key not in self.records:
            raise StorageError(f"record not found: {redis_key}")
        return dict(self.records[redis_key])

    async def ping(self) -> bool:
        return not self.fail_writes

    async def close(self) -> None:
        self.closed = True


class ModelServer:
    """Fake model server for httpx.MockTransport"""

    def __init__(self, probability: float = 0.9, status_code: int = 200, body=None, error=None):
        self.probability = probability
        self.status_code = status_code
        self.body = body
        self.error = error
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        if self.body is not None:
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json={"outputs": [[self.probability]]})

    def last_inputs(self) -> List[List[float]]:
        return json.loads(self.requests[-1].content)["inputs"]


def make_record(label="1", amount=100, components: int = 28, **overrides) -> Dict[str, Any]:
    """Stored record as Redis returns it (all strings)"""
    record = {
        "ClassBin": label,
        "AmountBin": str(amount),
        "set_name": "creditcard",
        "UserID": "u1",
    }
    for i in range(components):
        record[f"v{i}"] = str(round(0.1 * (i + 1), 3))
    record.update(overrides)
    return record


def make_predictor(server: ModelServer, timeout: float = 10.0) -> PredictionClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(server))
    return PredictionClient(SCORING_URL, timeout=timeout, http_client=http_client)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    return Settings(scoring_url=SCORING_URL)


@pytest.fixture
def full_record():
    return make_record()


@pytest.fixture
def store(settings, full_record):
    return InMemoryFeatureStore({
        make_key(settings.namespace, settings.set_name, "u1"): full_record
    })


@pytest.fixture
def model_server():
    return ModelServer(probability=0.9)


@pytest.fixture
def sample_transaction():
    return {
        "Timestamp": "2024-01-15T14:30:00Z",
        "Amount": 100,
        "UserID": "u1",
        "CCNumHash": "9f86d081884c7d65",
        "SellerID": 42,
        "ItemID": 7,
    }
