from __future__ import annotations

import logging

from fastapi import FastAPI

from app.api.deps import cfg
from app.api.routes.analytics import router as analytics_router
from app.api.routes.babies import router as babies_router
from app.api.routes.growth import router as growth_router
from app.api.routes.measurements import router as measurements_router
from app.api.routes.scan import router as scan_router
from app.db.session import init_db


logger = logging.getLogger(__name__)

app = FastAPI(title="Baby Growth Tracker API", version="0.1.0")

app.include_router(babies_router)
app.include_router(measurements_router)
app.include_router(growth_router)
app.include_router(scan_router)
app.include_router(analytics_router)


@app.on_event("startup")
def _startup() -> None:
    """Configure logging and create the database schema."""
    level = (cfg.get("logging") or {}).get("level", "INFO")
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    init_db()
    logger.info("Baby Growth Tracker API ready")


@app.get("/health")
def health():
    return {"status": "ok"}
