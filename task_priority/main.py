from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from task_priority.core.config import settings
from task_priority.core.database import engine, Base
from task_priority.core.logging import setup_logging
from task_priority.models import kv_entry  # noqa: F401  (enregistre la table)
from task_priority.routers import health, tasks, history

setup_logging()

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Task Priority API",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"]
)

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(tasks.router)
app.include_router(history.router)
