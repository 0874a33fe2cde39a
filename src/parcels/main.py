import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from parcels.config import Settings, settings
from parcels.errors import ParcelsError
from parcels.routers import health, history, reminders, shipments, stats
from parcels.storage.base import Store
from parcels.storage.sqlite import SQLiteStore
from parcels.storage.supabase import SupabaseStore

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


def build_store(config: Settings) -> Store:
    """Create the store adapter selected by configuration."""
    if config.store_backend == "supabase":
        return SupabaseStore(
            config.supabase_url, config.supabase_service_key, timeout=config.store_timeout
        )
    store = SQLiteStore(Path(config.data_dir) / "parcels.db", timeout=config.store_timeout)
    store.init_db()
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting Parcel Ledger with {settings.store_backend} store")
    app.state.store = build_store(settings)
    yield
    # Shutdown
    await app.state.store.close()
    logger.info("Parcel Ledger shutdown")


app = FastAPI(title="Parcel Ledger", lifespan=lifespan)


@app.exception_handler(ParcelsError)
async def parcels_error_handler(request: Request, exc: ParcelsError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code.value},
    )


# Include routers
app.include_router(health.router)
app.include_router(shipments.router, prefix="/paquetes")
app.include_router(history.router, prefix="/historial")
app.include_router(stats.router, prefix="/stats")
app.include_router(reminders.router, prefix="/recordatorios")
