import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aarohan.config import settings
from aarohan.data.opportunities import SAMPLE_OPPORTUNITIES
from aarohan.routes import (
    eligibility_router,
    recommendations_router,
    users_router,
    application_router,
    dashboard_router
)
from aarohan.services.mongo_service import mongo_service

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await mongo_service.connect()
    if not await mongo_service.list_opportunities():
        await mongo_service.upsert_opportunities(SAMPLE_OPPORTUNITIES)
    if not settings.llm_configured():
        logger.warning("OPENROUTER_API_KEY is not set; assistant features are disabled")
    yield
    # Shutdown
    await mongo_service.close()
    logger.info("Disconnected from MongoDB")


app = FastAPI(
    title=settings.app_name,
    description="PM Internship Scheme eligibility, recommendations and career assistant",
    version=settings.app_version,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(eligibility_router)
app.include_router(recommendations_router)
app.include_router(application_router)
app.include_router(dashboard_router)
app.include_router(users_router)


@app.get("/")
async def root():
    return {"message": "AAROHAN API is running", "version": settings.app_version}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    database_ok = await mongo_service.health_check()
    return {
        "status": "healthy" if database_ok else "degraded",
        "service": "aarohan-backend",
        "database": database_ok,
        "llm_configured": settings.llm_configured(),
        "stats": await mongo_service.get_database_stats() if database_ok else {}
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("aarohan.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
