import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.api.endpoints import employees, health
from app.services.api_service import ApiService
from app.services.employee_controller import EmployeeController

setup_logging(settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info(f"Starting up {settings.PROJECT_NAME} against {settings.API_BASE_URL}...")
    api = ApiService(settings.API_BASE_URL)
    app.state.controller = EmployeeController(api)

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}...")
    # The controller may have been replaced after startup
    await app.state.controller.api.aclose()
    if app.state.controller.api is not api:
        await api.aclose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Web client for managing employee records through the employee API",
    lifespan=lifespan
)

app.include_router(health.router)
app.include_router(employees.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload during development
        log_level="info"
    )
