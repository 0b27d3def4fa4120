from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from api.dependencies import get_conversion_service, get_rate_service
from api.schemas import ConversionResponse, ProviderStatusResponse, RatesResponse
from application.services import ConversionService, RateService

router = APIRouter(tags=['rates'])


def parse_symbols(symbols: str | None) -> set[str] | None:
	if not symbols:
		return None
	return {s.strip().upper() for s in symbols.split(',') if s.strip()}


@router.get(
	'/rates',
	response_model=RatesResponse,
	status_code=status.HTTP_200_OK,
	summary='Get the current rate set for a base currency',
)
async def get_rates(
	service: Annotated[RateService, Depends(get_rate_service)],
	base: Annotated[str, Query()] = 'USD',
	source: Annotated[str | None, Query()] = None,
	symbols: Annotated[str | None, Query(description='Comma separated currency codes')] = None,
) -> RatesResponse:
	snapshot = await service.fetch_rates(base.strip().upper(), source or None)

	# The cached snapshot keeps the full set; filter a copy
	rates = dict(snapshot.rates)
	requested = parse_symbols(symbols)
	if requested is not None:
		rates = {code: rate for code, rate in rates.items() if code in requested}

	return RatesResponse(
		rates=rates,
		base=snapshot.base,
		source=snapshot.source,
		timestamp=snapshot.provider_timestamp,
		updated_at_local=snapshot.retrieved_at.isoformat(),
	)


@router.get(
	'/providers',
	response_model=list[ProviderStatusResponse],
	status_code=status.HTTP_200_OK,
	summary='List provider health',
)
async def get_provider_status(
	service: Annotated[RateService, Depends(get_rate_service)],
) -> list[ProviderStatusResponse]:
	return [
		ProviderStatusResponse(
			name=view.name,
			status=view.status,
			last_success_at=view.last_success_at,
			last_failure_at=view.last_failure_at,
		)
		for view in service.get_provider_status()
	]


@router.get(
	'/convert/{from_currency}/{to_currency}/{amount}',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount',
)
async def convert_currency(
	from_currency: Annotated[str, Path(min_length=3, max_length=5)],
	to_currency: Annotated[str, Path(min_length=3, max_length=5)],
	amount: Annotated[Decimal, Path(gt=0)],
	service: Annotated[ConversionService, Depends(get_conversion_service)],
	source: Annotated[str | None, Query()] = None,
) -> ConversionResponse:
	result = await service.convert(amount, from_currency.upper(), to_currency.upper(), source or None)
	return ConversionResponse(**result)
