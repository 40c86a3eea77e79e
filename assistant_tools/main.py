from contextlib import asynccontextmanager
from typing import Optional
import logging
import sys

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from prometheus_fastapi_instrumentator import Instrumentator
import uvicorn

from assistant_tools.api.tool_calls import router as tool_calls_router
from assistant_tools.core.config import Settings, settings
from assistant_tools.core.exceptions import ToolCallError
from assistant_tools.db.base import Base
from assistant_tools.db.session import build_engine, build_session_factory
from assistant_tools.dispatch.dispatcher import ToolCallDispatcher
from assistant_tools.forwarder.client import QuestionForwarder
from assistant_tools.middleware.request_logging import RequestLoggingMiddleware
from assistant_tools.reminders.store import ReminderStore

# Configure logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Settings = settings,
    store: Optional[ReminderStore] = None,
    forwarder: Optional[QuestionForwarder] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Collaborators that are not passed in are built from ``app_settings`` at
    startup. A missing Perplexity credential raises ConfigurationError there,
    so the server never starts without the ability to forward questions.
    """
    logging.getLogger().setLevel(app_settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting up {app_settings.PROJECT_NAME}...")
        question_forwarder = forwarder or QuestionForwarder.from_settings(app_settings)
        engine = None
        reminder_store = store
        if reminder_store is None:
            engine = build_engine(app_settings.SQLALCHEMY_DATABASE_URI)
            Base.metadata.create_all(bind=engine)
            logger.info("Reminder tables ready")
            reminder_store = ReminderStore(build_session_factory(engine))
        app.state.dispatcher = ToolCallDispatcher(reminder_store, question_forwarder)
        try:
            yield
        finally:
            if engine is not None:
                engine.dispose()
            logger.info(f"Shutting down {app_settings.PROJECT_NAME}...")

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version=app_settings.VERSION,
        lifespan=lifespan,
    )
    app.add_middleware(RequestLoggingMiddleware, log_bodies=app_settings.LOG_REQUEST_BODIES)
    app.include_router(tool_calls_router, tags=["tool-calls"])

    @app.exception_handler(ToolCallError)
    async def tool_call_error_handler(request: Request, exc: ToolCallError):
        logger.error(f"Tool call batch failed: {exc}")
        return PlainTextResponse(str(exc), status_code=500)

    if app_settings.METRICS_ENABLED:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.SERVER_HOST, port=settings.SERVER_PORT)
