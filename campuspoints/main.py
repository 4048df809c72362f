import logging
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from mangum import Mangum
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from campuspoints import containers
from campuspoints.config import settings
from campuspoints.core.exceptions import BaseAPIException
from campuspoints.core.exception_handlers import (
    handle_base_api_exception,
    handle_http_exception,
    handle_unexpected_error,
    handle_validation_error,
)
from campuspoints.core.logging_middleware import LoggingMiddleware
from campuspoints.logging_config import setup_logging
from campuspoints.routers import (
    chat_router,
    health_router,
    note_router,
    user_router,
    wallet_router,
)

load_dotenv("campuspoints/.env")
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    setup_logging(log_level=settings.LOG_LEVEL, json_logs=settings.ENVIRONMENT != "development")

    app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)
    app.container = containers.Container()  # type: ignore

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(BaseAPIException, handle_base_api_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(health_router.router)
    app.include_router(user_router.router, prefix=settings.API_V1_STR)
    app.include_router(wallet_router.router, prefix=settings.API_V1_STR)
    app.include_router(chat_router.router, prefix=settings.API_V1_STR)
    app.include_router(note_router.router, prefix=settings.API_V1_STR)

    logger.info(f"{settings.APP_NAME} started ({settings.ENVIRONMENT})")
    return app


app = create_app()

handler = Mangum(app)
