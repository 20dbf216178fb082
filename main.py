import logging
import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from database import init_db
from api.applicants import router as applicants_router
from api.applications import router as applications_router
from api.lenders import router as lenders_router

logging.config.dictConfig({
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": settings.log_level.upper()},
})

logger = logging.getLogger("mortgage_api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Database ready at %s", settings.database_url.split("@")[-1])
    yield


app = FastAPI(
    title=settings.app_name,
    description="Mortgage application workflow and automated decision API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(applicants_router)
app.include_router(applications_router)
app.include_router(lenders_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
