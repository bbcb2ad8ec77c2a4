"""
Tests for environment-driven settings
"""
import pytest
from pydantic import ValidationError

from fraudcheck.config import DEFAULT_MODEL_SERVING_URL, Settings

ENV_VARS = [
    "REDIS_URL", "REDIS_HOST", "REDIS_PORT", "REDIS_PASSWORD",
    "STORE_NAMESPACE", "STORE_SET_NAME", "MODEL_SERVING_URL",
    "FEATURE_VECTOR_LENGTH", "FRAUD_THRESHOLD", "MODEL_SERVING_TIMEOUT_SEC",
    "API_HOST", "API_PORT", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env()

    assert settings.namespace == "test"
    assert settings.set_name == "creditcard"
    assert settings.scoring_url == DEFAULT_MODEL_SERVING_URL
    assert settings.feature_vector_length == 29
    assert settings.fraud_threshold == 0.5
    assert settings.timeout_sec == 10.0
    assert settings.api_port == 8090
    assert settings.store_url() == "redis://127.0.0.1:6379"


def test_env_overrides(clean_env):
    clean_env.setenv("STORE_NAMESPACE", "prod")
    clean_env.setenv("MODEL_SERVING_URL", "http://tf:8501/v1/models/fraud:predict")
    clean_env.setenv("FRAUD_THRESHOLD", "0.8")
    clean_env.setenv("MODEL_SERVING_TIMEOUT_SEC", "2.5")
    clean_env.setenv("REDIS_HOST", "cache")
    clean_env.setenv("REDIS_PASSWORD", "s3cret")

    settings = Settings.from_env()

    assert settings.namespace == "prod"
    assert settings.scoring_url == "http://tf:8501/v1/models/fraud:predict"
    assert settings.fraud_threshold == 0.8
    assert settings.timeout_sec == 2.5
    assert settings.store_url() == "redis://:s3cret@cache:6379"


def test_redis_url_wins(clean_env):
    clean_env.setenv("REDIS_URL", "redis://elsewhere:1234/2")
    clean_env.setenv("REDIS_HOST", "ignored")

    assert Settings.from_env().store_url() == "redis://elsewhere:1234/2"


@pytest.mark.parametrize("name, value", [
    ("FRAUD_THRESHOLD", "1.5"),
    ("MODEL_SERVING_TIMEOUT_SEC", "0"),
    ("REDIS_PORT", "not-a-port"),
    ("FEATURE_VECTOR_LENGTH", "1"),
])
def test_invalid_values(clean_env, name, value):
    clean_env.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings.from_env()
