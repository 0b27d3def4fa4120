# nosec B101


from datetime import UTC, datetime

import pytest

from domain.models.currency import Freshness, RateSnapshot

PROVIDER_TS = 1760832000


def make_snapshot(rates=None):
    return RateSnapshot(
        rates={'EUR': 0.92, 'GBP': 0.79} if rates is None else rates,
        base='USD',
        source='ExchangeRate-API',
        provider_timestamp=PROVIDER_TS,
        retrieved_at=datetime(2025, 10, 19, tzinfo=UTC),
    )


def test_empty_rates_rejected():
    with pytest.raises(ValueError):
        make_snapshot(rates={})


def test_non_positive_rate_rejected():
    with pytest.raises(ValueError) as exc_info:
        make_snapshot(rates={'EUR': 0.92, 'XXX': 0})

    assert 'XXX' in str(exc_info.value)


def test_rates_are_read_only_copy():
    source_rates = {'EUR': 0.92}
    snapshot = make_snapshot(rates=source_rates)

    source_rates['EUR'] = 5.0
    assert snapshot.rates['EUR'] == 0.92

    with pytest.raises(TypeError):
        snapshot.rates['EUR'] = 1.0


def test_snapshot_is_frozen():
    snapshot = make_snapshot()

    with pytest.raises(AttributeError):
        snapshot.source = 'Fixer.io'


def test_age_seconds_uses_provider_timestamp():
    assert make_snapshot().age_seconds(PROVIDER_TS + 90) == 90


@pytest.mark.parametrize(
    'age, expected',
    [
        (0, Freshness.FRESH),
        (6 * 60 - 1, Freshness.FRESH),
        (6 * 60, Freshness.RECENT),
        (61 * 60 - 1, Freshness.RECENT),
        (61 * 60, Freshness.STALE),
    ],
)
def test_freshness_labels(age, expected):
    assert make_snapshot().freshness(PROVIDER_TS + age) == expected
