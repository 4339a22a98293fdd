# bulkbridge/main.py
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from bulkbridge import __version__
from bulkbridge.core.logging_config import logger, setup_logging
from bulkbridge.core.settings import Settings, get_settings
from bulkbridge.routers import uploads


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    # Settings eerst: ontbrekende AWS/PORT config => geen app
    settings = settings or get_settings()

    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME, version=__version__)
    app.state.settings = settings

    # ----------------------------------------------------
    # Health
    # ----------------------------------------------------
    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Bulk Bridge Server is running"

    # ----------------------------------------------------
    # Logging middleware
    # ----------------------------------------------------
    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        start = time.time()
        client_ip = request.client.host if request.client else "unknown"

        bound_logger = logger.bind(
            ip=client_ip,
            endpoint=str(request.url.path),
            method=request.method,
        )

        bound_logger.info("request_started")
        response = await call_next(request)
        latency_ms = round((time.time() - start) * 1000, 2)

        bound_logger.bind(status_code=response.status_code, latency_ms=latency_ms).info(
            "request_finished"
        )
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        logger.bind(endpoint=str(request.url.path), errors=len(exc.errors())).warning(
            "request_validation_failed"
        )
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid request data",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    # ----------------------------------------------------
    # Routers
    # ----------------------------------------------------
    app.include_router(uploads.router)

    logger.info("startup", service="bulkbridge-api", bucket=settings.AWS_S3_BUCKET_NAME)
    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
