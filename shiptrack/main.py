import logging

from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from shiptrack.version import VERSION
from shiptrack.api import auth, notifications, shipments
from shiptrack.core.config import settings
from shiptrack.core.logging_config import configure_logging
from shiptrack.store.record_store import RecordStore

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create instrumentator first
instrumentator = Instrumentator()

app = FastAPI(title="Shipment Tracking Service", version=VERSION)
app.state.store = RecordStore.from_directory(settings.DATA_DIR)

# Instrument the app BEFORE adding routes or middleware
instrumentator.instrument(app).expose(
    app,
    include_in_schema=False,
    endpoint="/shipping/metrics",
    should_gzip=True,
)

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/shipping/health")
def shipping_health():
    return {"status": "ok"}

@app.get("/v1/_info")
def info():
    return {"service": "shipping", "version": VERSION}

@app.on_event("startup")
async def startup_event():
    for route in app.routes:
        if hasattr(route, "methods") and hasattr(route, "path"):
            logger.debug("%s %s", sorted(route.methods), route.path)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(shipments.router, prefix="/api/shipments", tags=["shipments"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["notifications"])
