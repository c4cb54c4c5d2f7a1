from fastapi import FastAPI
from app.config import LOG_LEVEL
from app.database import Base, engine
from app.logging_setup import setup_logging
from app.routers import auth, tasks
from app.utils.errors import register_exception_handlers

setup_logging(LOG_LEVEL)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Task Manager API")

register_exception_handlers(app)

# API routers
app.include_router(auth.router)
app.include_router(tasks.router)
