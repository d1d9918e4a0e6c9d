import logging
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from catalog.core.exceptions import CatalogServiceError
from catalog.core.logging_config import configure_logging
from catalog.database.connection import Base, engine
from catalog.middleware.metrics import MetricsMiddleware, new_metrics
from catalog.models import registry  # noqa: F401
from catalog.routes import system
from catalog.routes.favorites import router as favorites_router
from catalog.routes.history import router as history_router
from catalog.routes.preferences import router as preferences_router
from catalog.routes.products import router as product_router
from catalog.routes.reference import router as reference_router

configure_logging()
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Amazon Product Catalog & Preference Filtering Service")

app.add_middleware(MetricsMiddleware)


@app.exception_handler(CatalogServiceError)
async def catalog_error_handler(request: Request, exc: CatalogServiceError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(product_router)
app.include_router(history_router)
app.include_router(preferences_router)
app.include_router(favorites_router)
app.include_router(reference_router)
app.include_router(system.router)


@app.on_event("startup")
async def startup_event():
    app.state.start_time = datetime.utcnow()
    app.state.metrics = new_metrics()
    logger.info("Catalog service started")
