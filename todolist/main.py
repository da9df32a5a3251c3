import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.orm import Session

from todolist.config import Settings
from todolist.database import Database
from todolist.errors import TaskError, status_for
from todolist.logging_setup import setup_logging
from todolist.schemas import TaskCreate, TaskDeleted, TaskResponse, TaskToggle, TaskUpdate
from todolist.store import TaskStore

logger = logging.getLogger(__name__)


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> TaskStore:
    return TaskStore(db)


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "invalid request"


async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, code, exc)
    return JSONResponse(status_code=code, content={"detail": str(exc)})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    detail = _describe_validation(exc)
    logger.info("%s %s rejected: %s", request.method, request.url.path, detail)
    return JSONResponse(status_code=status_for(exc), content={"detail": detail})


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the API around an explicitly owned database handle."""
    settings = settings or Settings.from_env()
    database = database or Database(settings.database_url)

    # Create the database tables
    database.create_schema()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("%s started", settings.app_name)
        yield
        app.state.database.dispose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(TaskError, task_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    if settings.metrics_enabled:
        Instrumentator(registry=CollectorRegistry()).instrument(app).expose(app, endpoint="/metrics")

    @app.get("/")
    def root():
        return {"message": "App is working"}

    @app.get("/tasks", response_model=list[TaskResponse])
    def get_tasks(store: TaskStore = Depends(get_store)):
        return store.get_all()

    @app.get("/tasks/{task_id}", response_model=TaskResponse)
    def get_task(task_id: str, store: TaskStore = Depends(get_store)):
        return store.get(task_id)

    @app.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
    def create_task(task: TaskCreate, store: TaskStore = Depends(get_store)):
        return store.create(task.title, task.description)

    @app.put("/tasks/{task_id}", response_model=TaskResponse)
    def update_task(task_id: str, task: TaskUpdate, store: TaskStore = Depends(get_store)):
        return store.update(task_id, task.model_dump(exclude_unset=True))

    @app.patch("/tasks/{task_id}/toggle", response_model=TaskResponse)
    def toggle_task(task_id: str, body: TaskToggle, store: TaskStore = Depends(get_store)):
        return store.set_completed(task_id, body.completed)

    @app.delete("/tasks/{task_id}", response_model=TaskDeleted)
    def delete_task(task_id: str, store: TaskStore = Depends(get_store)):
        store.delete(task_id)
        return TaskDeleted(message="Task deleted successfully", id=task_id)

    return app


def run() -> None:
    import uvicorn

    settings = Settings.from_env()
    setup_logging(level=settings.log_level, log_dir=settings.log_dir)
    uvicorn.run(
        "todolist.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
