from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from file_processor.core.config import settings
from file_processor.core.logging import ROOT_LOGGER, setup_logger
from file_processor.api.extract_routes import router as extract_router

# Initialize settings and logger
logger = setup_logger(settings.LOG_LEVEL, name=ROOT_LOGGER)

app = FastAPI(title=settings.APP_NAME)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(extract_router)  # Extraction endpoints (already has /api prefix)


@app.on_event("startup")
async def startup_event():
    """Log the effective configuration on startup."""
    logger.info(f"{settings.APP_NAME} started in {settings.ENV} environment")
    logger.info(f"Transient files directory: {settings.DOWNLOADS_DIR}")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "env": settings.ENV
    }
