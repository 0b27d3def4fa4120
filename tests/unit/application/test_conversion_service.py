# nosec B101


from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from application.services.conversion_service import ConversionService
from application.services.rate_service import RateService
from domain.exceptions.currency import InvalidCurrencyError
from domain.models.currency import Freshness, RateSnapshot

NOW = 1_760_832_000.0


@pytest.fixture
def rate_service():
    service = Mock(spec=RateService)
    service.fetch_rates = AsyncMock(return_value=RateSnapshot(
        rates={'EUR': 0.9215, 'JPY': 151.37},
        base='USD',
        source='ExchangeRate-API',
        provider_timestamp=int(NOW - 120),
        retrieved_at=datetime.fromtimestamp(NOW, tz=UTC),
    ))
    service.now.return_value = NOW
    return service


@pytest.mark.asyncio
async def test_convert_multiplies_and_rounds(rate_service):
    service = ConversionService(rate_service=rate_service)

    result = await service.convert(Decimal('100'), 'USD', 'EUR')

    assert result['converted_amount'] == Decimal('92.15')
    assert result['exchange_rate'] == Decimal('0.9215')
    assert result['source'] == 'ExchangeRate-API'
    assert result['timestamp'] == int(NOW - 120)
    assert result['freshness'] == Freshness.FRESH
    rate_service.fetch_rates.assert_awaited_once_with('USD', None)


@pytest.mark.asyncio
async def test_convert_passes_pinned_source(rate_service):
    service = ConversionService(rate_service=rate_service)

    await service.convert(Decimal('2.5'), 'USD', 'JPY', source='ExchangeRate-API')

    rate_service.fetch_rates.assert_awaited_once_with('USD', 'ExchangeRate-API')


@pytest.mark.asyncio
async def test_convert_same_currency_uses_unit_rate(rate_service):
    service = ConversionService(rate_service=rate_service)

    result = await service.convert(Decimal('12.345'), 'USD', 'USD')

    assert result['exchange_rate'] == Decimal('1')
    assert result['converted_amount'] == Decimal('12.35')


@pytest.mark.asyncio
async def test_convert_unknown_target_raises(rate_service):
    service = ConversionService(rate_service=rate_service)

    with pytest.raises(InvalidCurrencyError) as exc_info:
        await service.convert(Decimal('1'), 'USD', 'XYZ')

    assert 'XYZ' in str(exc_info.value)
