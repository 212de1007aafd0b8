from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from brandaudit.core.config import settings
from brandaudit.core.limiter import limiter

from contextlib import asynccontextmanager
import logging

from brandaudit.api import endpoints
from brandaudit.services.analysis_store import AnalysisStore
from brandaudit.services.catalog import get_guideline_catalog

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Build the guideline catalog and result store
    app.state.catalog = get_guideline_catalog()
    app.state.analysis_store = AnalysisStore()
    logger.info(f"Guideline catalog ready ({app.state.catalog.count()} brands, type={settings.CATALOG_TYPE})")
    yield
    app.state.analysis_store.reset()

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Rate Limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

_cors_origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(endpoints.router, prefix="/api", tags=["api"])

@app.get("/health")
def health_check():
    return {"status": "healthy", "project": settings.PROJECT_NAME}

@app.get("/")
def root():
    return {"message": "Welcome to the Brand Audit API"}
