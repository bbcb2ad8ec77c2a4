"""
End-to-end tests through the FastAPI app
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import InMemoryFeatureStore, ModelServer, make_predictor
from fraudcheck.main import create_app


@pytest.fixture
def client_for(settings):
    """Build a TestClient around the given store / model server"""
    clients = []

    def _make(store, server):
        app = create_app(settings, store=store, predictor=make_predictor(server))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


class TestScoreEndpoint:

    def test_fraud_match(self, client_for, store, model_server, sample_transaction):
        client = client_for(store, model_server)

        response = client.post("/", json=sample_transaction)

        assert response.status_code == 200
        assert response.content == b""
        assert len(model_server.requests) == 1

    @pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "TRACE"])
    def test_any_method(self, client_for, store, model_server, sample_transaction, method):
        client = client_for(store, model_server)

        response = client.request(method, "/", json=sample_transaction)

        assert response.status_code == 200

    def test_mismatch_is_still_success(self, client_for, store, sample_transaction):
        client = client_for(store, ModelServer(probability=0.1))

        response = client.post("/", json=sample_transaction)

        assert response.status_code == 200

    def test_bad_json(self, client_for, store, model_server):
        client = client_for(store, model_server)

        response = client.post("/", content=b"{oops", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert "invalid transaction JSON" in response.text

    def test_missing_record(self, client_for, model_server, sample_transaction):
        client = client_for(InMemoryFeatureStore(), model_server)

        response = client.post("/", json=sample_transaction)

        assert response.status_code == 400
        assert "record not found" in response.text
        assert model_server.requests == []

    def test_store_write_failure(self, client_for, model_server, sample_transaction):
        client = client_for(InMemoryFeatureStore(fail_writes=True), model_server)

        response = client.post("/", json=sample_transaction)

        assert response.status_code == 400
        assert "store write failed" in response.text

    def test_prediction_timeout(self, client_for, store, sample_transaction):
        server = ModelServer(error=lambda req: httpx.ReadTimeout("timed out", request=req))
        client = client_for(store, server)

        response = client.post("/", json=sample_transaction)

        assert response.status_code == 400
        assert "timed out" in response.text

    def test_missing_label(self, client_for, settings, model_server, sample_transaction):
        store = InMemoryFeatureStore({"test:creditcard:u1": {"AmountBin": "10"}})
        client = client_for(store, model_server)

        response = client.post("/", json=sample_transaction)

        assert response.status_code == 400
        assert "ClassBin" in response.text


class TestHealth:

    def test_healthy(self, client_for, store, model_server, settings):
        client = client_for(store, model_server)

        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["store"] == "connected"
        assert body["scoring_url"] == settings.scoring_url
        assert body["fraud_threshold"] == 0.5

    def test_store_down(self, client_for, model_server):
        client = client_for(InMemoryFeatureStore(fail_writes=True), model_server)

        body = client.get("/health").json()

        assert body["status"] == "degraded"
        assert body["store"] == "unreachable"


class TestLifespan:

    def test_injected_store_not_closed(self, settings, store, model_server):
        app = create_app(settings, store=store, predictor=make_predictor(model_server))

        with TestClient(app):
            pass

        assert store.closed is False
