import logging
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI
from network_crm.core.config import settings
from network_crm.api.errors import register_exception_handlers
from network_crm.api.contacts import router as contacts_router
from network_crm.api.interactions import router as interactions_router
from network_crm.api.relationships import router as relationships_router
from network_crm.api.tags import router as tags_router
from network_crm.api.analytics import router as analytics_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up Network CRM API...")
    yield
    logger.info("Shutting down Network CRM API...")


app = FastAPI(
    title="Network CRM API",
    docs_url="/docs" if not settings.APP_DOMAIN else None,
    redoc_url=None,
    lifespan=lifespan,
)

register_exception_handlers(app)

# Include routers
app.include_router(contacts_router)
app.include_router(interactions_router)
app.include_router(relationships_router)
app.include_router(tags_router)
app.include_router(analytics_router)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


@app.get("/")
async def root():
    return {"message": "Network CRM API", "version": "0.1.0"}


def main():
    import uvicorn

    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=settings.LOG_LEVEL,
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    uvicorn.run("network_crm.main:app", host="0.0.0.0", port=8000, reload=settings.is_dev_mode)


if __name__ == '__main__':
    main()
