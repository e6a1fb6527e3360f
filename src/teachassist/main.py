"""
TeachAssist FastAPI Application

Teacher productivity service: calendar, resource library, AI quiz generator
and event reminders.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from teachassist import __version__
from teachassist.config import settings
from teachassist.core.cache import init_list_cache
from teachassist.core.database import AsyncSessionLocal, close_db, engine, init_db
from teachassist.core.errors import TeachAssistError
from teachassist.reminders import ReminderPoller, reminder_inbox

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Startup:
    - Configure logging
    - Verify database connection (and create tables locally)
    - Start the reminder poller

    Shutdown:
    - Stop the reminder poller
    - Close database connections
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    print("🚀 TeachAssist starting...")

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        print("✅ Database connection verified")
        if settings.is_local:
            await init_db()
            print("✅ Local tables ensured")
    except Exception as e:
        print(f"❌ Database connection failed: {e}")
        raise

    poller: ReminderPoller | None = None
    if settings.REMINDER_POLLING_ENABLED:
        poller = ReminderPoller(AsyncSessionLocal, reminder_inbox)
        poller.start()
        print(f"⏰ Reminder poller started ({poller.interval_seconds}s interval)")

    print("✅ TeachAssist ready!")

    yield

    print("🛑 TeachAssist shutting down...")
    if poller is not None:
        await poller.stop()
    await close_db()
    print("✅ Shutdown complete")


async def teachassist_error_handler(request: Request, exc: TeachAssistError) -> JSONResponse:
    """Render domain errors as ``{"detail", "error"}`` with their status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="TeachAssist",
        description="Calendar, resources and AI quiz tools for teachers",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_local else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TeachAssistError, teachassist_error_handler)  # type: ignore[arg-type]
    init_list_cache()

    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "service": "TeachAssist",
            "status": "operational",
            "version": __version__,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health", tags=["Health"], response_model=None)
    async def health_check() -> JSONResponse:
        """Health check endpoint for load balancers.

        Returns:
            - status: healthy/unhealthy
            - checks: Individual health checks
        """
        checks: dict[str, dict[str, Any]] = {}

        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            checks["database"] = {"status": "healthy"}
        except Exception as e:
            checks["database"] = {"status": "unhealthy", "error": str(e)}

        # Missing key degrades quiz generation only
        checks["llm"] = {
            "status": "healthy" if settings.OPENAI_API_KEY else "degraded",
            "model": settings.OPENAI_MODEL,
        }

        all_healthy = checks["database"]["status"] == "healthy"
        status_code = 200 if all_healthy else 503

        return JSONResponse(
            status_code=status_code,
            content={
                "status": "healthy" if all_healthy else "unhealthy",
                "environment": settings.ENVIRONMENT,
                "checks": checks,
            },
        )

    @app.get("/health/ready", tags=["Health"], response_model=None)
    async def readiness_check() -> dict[str, str] | JSONResponse:
        """Readiness check. Returns 200 when the database is reachable."""
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "ready"}
        except Exception:
            return JSONResponse(
                status_code=503,
                content={"status": "not_ready"},
            )

    @app.get("/health/live", tags=["Health"])
    async def liveness_check() -> dict[str, str]:
        """Liveness check. Returns 200 if the process is alive."""
        return {"status": "alive"}

    from teachassist.api.v1 import (
        dashboard,
        events,
        navigation,
        profile,
        quizzes,
        reminders,
        resources,
    )

    app.include_router(events.router, prefix="/api/v1/events", tags=["Calendar"])
    app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["Dashboard"])
    app.include_router(resources.router, prefix="/api/v1/resources", tags=["Resources"])
    app.include_router(profile.router, prefix="/api/v1/profile", tags=["Profile"])
    app.include_router(quizzes.router, prefix="/api/v1/quizzes", tags=["Quizzes"])
    app.include_router(reminders.router, prefix="/api/v1/reminders", tags=["Reminders"])
    app.include_router(navigation.router, prefix="/api/v1/navigation", tags=["Navigation"])

    # Public URLs recorded for locally stored uploads
    if settings.STORAGE_BACKEND == "local":
        app.mount(
            f"/storage/v1/object/public/{settings.S3_RESOURCES_BUCKET}",
            StaticFiles(directory=settings.LOCAL_STORAGE_PATH, check_dir=False),
            name="resource-files",
        )

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "teachassist.main:app",
        host="0.0.0.0",  # nosec B104 - Intentional for containerized deployment
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
