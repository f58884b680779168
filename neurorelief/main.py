import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from neurorelief import __version__
from neurorelief.config import settings
from neurorelief.core.error_handling import register_exception_handlers
from neurorelief.core.logging import configure_logging
from neurorelief.database import Base, SessionLocal, engine
from neurorelief.routers import (
    analytics,
    assessment_templates,
    auth_api,
    episodes,
    medical_logs,
    medications,
    reports,
    triggers,
)
from neurorelief.services.storage import DatabaseStorage

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting NeuroRelief backend ({settings.ENVIRONMENT})...")

    logger.info("Creating database tables...")
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ready")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise

    yield

    engine.dispose()
    logger.info("Shutdown complete")


app = FastAPI(
    title="NeuroRelief - Migraine Tracking API",
    description="Episode, medication, trigger and medical log tracking with weekly analytics and reports",
    version=__version__,
    lifespan=lifespan
)

# One storage object per process, injected into handlers via get_storage
app.state.storage = DatabaseStorage(SessionLocal)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_api.router)
app.include_router(episodes.router)
app.include_router(medications.router)
app.include_router(medications.logs_router)
app.include_router(triggers.router)
app.include_router(analytics.router)
app.include_router(reports.router)
app.include_router(medical_logs.router)
app.include_router(assessment_templates.router)


@app.get("/")
async def root():
    return {
        "message": "NeuroRelief API",
        "version": __version__,
        "status": "operational"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "neurorelief.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
