import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from domain.exceptions.currency import InvalidCurrencyError, RateServiceError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(InvalidCurrencyError)
	async def invalid_currency_handler(request: Request, exc: InvalidCurrencyError):
		return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'error': str(exc)})

	@app.exception_handler(RateServiceError)
	async def rate_service_error_handler(request: Request, exc: RateServiceError):
		logger.error(f'Rate fetch failed: {exc}')
		return JSONResponse(
			status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={'error': str(exc)}
		)

	@app.exception_handler(Exception)
	async def global_exception_handler(request: Request, exc: Exception):
		logger.error(f'Unhandled exception: {exc}', exc_info=True)
		return JSONResponse(
			status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
			content={'error': 'Internal server error'},
		)
