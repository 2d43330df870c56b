# app/main.py

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.database import db

# Routers
from app.modules.mfa_providers.router import router as mfa_providers_router

logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application startup/shutdown lifecycle.
    - Connect DB pool (postgres backend only)
    """
    logger.info("Starting %s (storage=%s)...", settings.APP_NAME, settings.STORAGE_BACKEND)
    if settings.STORAGE_BACKEND == "postgres":
        await db.connect()
        logger.info("Database connection pool established.")
    yield
    logger.info("Shutting down %s...", settings.APP_NAME)
    if settings.STORAGE_BACKEND == "postgres":
        await db.disconnect()
        logger.info("Database connection pool closed.")


app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    lifespan=lifespan,
)


# -------------------------------------------------------------------
# HEALTH CHECK
# -------------------------------------------------------------------
@app.get("/health", tags=["System"])
async def health_check():
    """
    Runtime liveness probe used by infra / load balancers.
    Verifies the storage backend.
    """
    if settings.STORAGE_BACKEND == "memory":
        db_health = True
    else:
        db_health = await db.ping()

    status_code = 200 if db_health else 503

    return JSONResponse(
        status_code=status_code,
        content={
            "status": "ok" if status_code == 200 else "unhealthy",
            "components": {
                "storage": settings.STORAGE_BACKEND,
                "database": "connected" if db_health else "disconnected",
            },
        },
    )


# -------------------------------------------------------------------
# API ROUTERS
# -------------------------------------------------------------------
# Mounted at the root: clients call /mfa-providers directly
app.include_router(mfa_providers_router)
