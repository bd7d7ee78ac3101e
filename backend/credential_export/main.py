from fastapi import FastAPI
from credential_export.core.config import settings
from credential_export.core.logging_config import setup_logger
from credential_export.api import health, exports

setup_logger()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
)

# Include routers
app.include_router(health.router, prefix=settings.API_V1_PREFIX, tags=["health"])
app.include_router(exports.router, prefix=settings.API_V1_PREFIX, tags=["exports"])


@app.get("/")
async def root():
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
    }
