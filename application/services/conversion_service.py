from decimal import ROUND_HALF_UP, Decimal

from application.services.rate_service import RateService
from domain.exceptions.currency import InvalidCurrencyError

CENTS = Decimal('0.01')


class ConversionService:
	def __init__(self, rate_service: RateService):
		self.rate_service = rate_service

	async def convert(
		self, amount: Decimal, from_currency: str, to_currency: str, source: str | None = None
	) -> dict:
		snapshot = await self.rate_service.fetch_rates(from_currency, source)

		if to_currency == from_currency:
			rate = Decimal('1')
		elif to_currency in snapshot.rates:
			rate = Decimal(str(snapshot.rates[to_currency]))
		else:
			raise InvalidCurrencyError(
				f'Currency {to_currency} is not quoted by {snapshot.source} for base {from_currency}'
			)

		converted_amount = (amount * rate).quantize(CENTS, rounding=ROUND_HALF_UP)

		return {
			'from_currency': from_currency,
			'to_currency': to_currency,
			'original_amount': amount,
			'converted_amount': converted_amount,
			'exchange_rate': rate,
			'timestamp': snapshot.provider_timestamp,
			'source': snapshot.source,
			'freshness': snapshot.freshness(self.rate_service.now()),
		}
