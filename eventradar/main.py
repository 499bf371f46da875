import logging.config
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eventradar.api.router import api_router
from eventradar.config import Settings, get_settings
from eventradar.database import Database
from eventradar.exceptions import EventRadarError
from eventradar.logging_config import configure_logging, get_logger
from eventradar.middleware import RequestLoggingMiddleware
from eventradar.services.geocoding import ReverseGeocodingService

logger = get_logger("main")


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the FastAPI application.
    
    Args:
        settings: Settings to use, defaults to the cached environment settings
        database: Prebuilt database handle, defaults to one for ``settings.DATABASE_URL``
        
    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()
    logging.config.dictConfig(configure_logging(settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting EventRadar API")
        app.state.db = database or Database.from_settings(settings)
        await app.state.db.create_tables()
        yield
        logger.info("Shutting down EventRadar API")
        await app.state.db.dispose()
    
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.geocoder = ReverseGeocodingService(settings)
    
    # Set up CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_V1_STR)
    
    @app.get("/", tags=["Health"])
    async def health_check():
        """Root endpoint for health checks."""
        return {"status": "healthy", "message": "EventRadar API is running"}
    
    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Map every error to a ``{"message": ...}`` JSON body."""
    
    @app.exception_handler(EventRadarError)
    async def handle_eventradar_error(request: Request, exc: EventRadarError):
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "path": request.url.path,
                "status_code": exc.status_code,
            },
        )
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})
    
    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": f"Invalid request: {exc.errors()}"})
    
    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def run() -> None:
    import uvicorn
    
    settings = get_settings()
    uvicorn.run(
        "eventradar.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
