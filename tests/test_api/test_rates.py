from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_rate_service
from api.main import create_app
from application.services import RateService
from config.settings import Settings
from domain.exceptions.currency import (
    AllProvidersExhaustedError,
    ProviderTimeoutError,
    UnknownProviderError,
)
from domain.models.currency import RateSnapshot

NOW = 1_760_832_000.0


@pytest.fixture
def snapshot():
    return RateSnapshot(
        rates={"EUR": 0.92, "GBP": 0.79, "JPY": 151.37},
        base="USD",
        source="ExchangeRate-API",
        provider_timestamp=int(NOW - 300),
        retrieved_at=datetime(2025, 10, 19, 0, 0, 5, tzinfo=UTC),
    )


@pytest.fixture
def mock_rate_service(snapshot):
    mock_service = Mock(spec=RateService)
    mock_service.fetch_rates = AsyncMock(return_value=snapshot)
    mock_service.now.return_value = NOW
    return mock_service


@pytest.fixture
def client(mock_rate_service):
    app = create_app(Settings())
    app.dependency_overrides[get_rate_service] = lambda: mock_rate_service
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def test_rates_success(client, mock_rate_service):
    response = client.get("/rates", params={"base": "USD"})

    assert response.status_code == 200
    assert response.json() == {
        "rates": {"EUR": 0.92, "GBP": 0.79, "JPY": 151.37},
        "base": "USD",
        "source": "ExchangeRate-API",
        "timestamp": int(NOW - 300),
        "updated_at_local": "2025-10-19T00:00:05+00:00",
    }
    mock_rate_service.fetch_rates.assert_awaited_once_with("USD", None)


def test_rates_defaults_to_usd_and_normalizes_case(client, mock_rate_service):
    client.get("/rates")
    client.get("/api/rates", params={"base": "eur"})

    assert mock_rate_service.fetch_rates.await_args_list[0].args == ("USD", None)
    assert mock_rate_service.fetch_rates.await_args_list[1].args == ("EUR", None)


def test_rates_passes_source(client, mock_rate_service):
    response = client.get("/api/rates", params={"base": "USD", "source": "Fixer.io"})

    assert response.status_code == 200
    mock_rate_service.fetch_rates.assert_awaited_once_with("USD", "Fixer.io")


def test_rates_symbols_filter_does_not_touch_snapshot(client, snapshot):
    response = client.get("/rates", params={"symbols": "eur, jpy,XXX"})

    assert response.status_code == 200
    assert response.json()["rates"] == {"EUR": 0.92, "JPY": 151.37}
    assert set(snapshot.rates) == {"EUR", "GBP", "JPY"}


def test_rates_all_providers_failed_returns_503(client, mock_rate_service):
    mock_rate_service.fetch_rates.side_effect = AllProvidersExhaustedError(
        "USD", ["ExchangeRate-API timed out after 5s", "Fixer.io: missing FIXER_API_KEY"]
    )

    response = client.get("/rates")

    assert response.status_code == 503
    error = response.json()["error"]
    assert "All providers failed for USD" in error
    assert "ExchangeRate-API timed out after 5s" in error
    assert "Fixer.io: missing FIXER_API_KEY" in error


@pytest.mark.parametrize(
    "error",
    [
        UnknownProviderError("Unknown provider: Nope"),
        ProviderTimeoutError("Fixer.io", "Fixer.io timed out after 5s"),
    ],
)
def test_rates_pinned_failures_return_503(client, mock_rate_service, error):
    mock_rate_service.fetch_rates.side_effect = error

    response = client.get("/rates", params={"source": "Nope"})

    assert response.status_code == 503
    assert response.json() == {"error": str(error)}


def test_convert_success(client, mock_rate_service):
    response = client.get("/api/convert/usd/eur/100")

    assert response.status_code == 200
    data = response.json()
    assert data["from_currency"] == "USD"
    assert data["to_currency"] == "EUR"
    assert float(data["converted_amount"]) == 92.0
    assert data["source"] == "ExchangeRate-API"
    assert data["freshness"] == "fresh"
    mock_rate_service.fetch_rates.assert_awaited_once_with("USD", None)


def test_convert_unquoted_currency_returns_400(client):
    response = client.get("/api/convert/USD/XYZ/10")

    assert response.status_code == 400
    assert "XYZ" in response.json()["error"]


def test_convert_rejects_non_positive_amount(client):
    response = client.get("/api/convert/USD/EUR/0")

    assert response.status_code == 422
