from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from app.config.settings import app_config
from app.database import Base, engine
from app.routers import goal, tasks, time_log
from app import models  # noqa: F401  registers every table on Base.metadata

logging.basicConfig(
    level=app_config.LOGGING['level'],
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Goal Tracker API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_config.CORS['origins'],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Route registration
app.include_router(goal.router)
app.include_router(tasks.router)
app.include_router(time_log.router)

@app.on_event("startup")
def startup_event():
    logger.info("Starting Goal Tracker API...")
    if app_config.DATABASE['auto_create_tables']:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables are in place")

@app.on_event("shutdown")
def shutdown_event():
    logger.info("Shutting down Goal Tracker API...")
    engine.dispose()

# Root route
@app.get("/")
def read_root():
    return {"message": "Goal Tracker API"}

@app.get("/health")
def health():
    return {"status": "ok"}
