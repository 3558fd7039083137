import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventflow import config
from eventflow.api.routes import router
from eventflow.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Event Flow Visualizer",
    version="0.1.0",
)

# Middleware FIRST
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes AFTER middleware
app.include_router(router)

logger.info("Event flow API ready (edge selection: %s)", config.EDGE_SELECTION)
