from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from beanie import init_beanie

from config import CORS_ORIGINS
from models import db, client, ALL_MODELS
from api.api_router import api_router
from utils.logger import get_logger

logger = get_logger("health_tracker")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_beanie(
        database=db,
        document_models=ALL_MODELS,
    )
    logger.info("beanie initialised on %s", db.name)
    yield
    client.close()

app = FastAPI(
    lifespan=lifespan,
    title="health_tracker",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)

@app.get("/healthcheck", status_code=200)
async def healthcheck():
    return {"status": "ok"}
