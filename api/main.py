import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import build_rate_service
from api.error_handlers import register_exception_handlers
from api.routes import health, rates
from config.logger import configure_logging
from config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
	settings = settings or get_settings()

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)
		logger.info(f'Starting {settings.APP_NAME}...')

		app.state.rate_service = build_rate_service(settings)
		logger.info('Application ready')

		yield

		logger.info('Shutting down...')
		await app.state.rate_service.close()
		logger.info('Cleanup complete')

	app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)

	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.CORS_ORIGINS,
		allow_methods=['GET'],
		allow_headers=['*'],
	)

	app.include_router(health.router)
	app.include_router(rates.router)
	app.include_router(rates.router, prefix='/api')
	register_exception_handlers(app)

	return app


app = create_app()


if __name__ == '__main__':
	import uvicorn

	settings = get_settings()
	uvicorn.run('api.main:app', host=settings.HOST, port=settings.PORT, log_level='info')
