import logging

from fastapi import FastAPI

from app.core.logging_middleware import LoggingMiddleware
from app.db.init_db import init_db
from app.db.session import SessionLocal
from app.routers.config import router as config_router
from app.routers.uploads import router as uploads_router
from app.services.config_store import ConfigStore

logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Late Penalty Grader")

# Middleware
app.add_middleware(LoggingMiddleware)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Startup event
@app.on_event("startup")
def on_startup():
    init_db()
    app.state.config_store = ConfigStore.load(SessionLocal)


# Include routers
app.include_router(config_router, prefix="/api", tags=["config"])
app.include_router(uploads_router, prefix="/api", tags=["upload"])
