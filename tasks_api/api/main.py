# api/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from ..db.errors import NothingToUpdate, StorageError
from .endpoints import tasks


def create_app(db, title: str = "tasks-api") -> FastAPI:
    """
    Собирает приложение вокруг переданного хранилища.

    Пул открывается до создания приложения (см. tasks_api/main.py),
    здесь он только закрывается при остановке.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await db.close()

    app = FastAPI(title=title, lifespan=lifespan)
    app.state.db = db

    # Регистрация маршрутов
    app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])

    @app.get("/", response_class=PlainTextResponse)
    async def read_root():
        return "Hello world"

    @app.exception_handler(NothingToUpdate)
    async def nothing_to_update_handler(request: Request, exc: NothingToUpdate):
        return JSONResponse({"success": False, "message": str(exc)}, status_code=400)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logging.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse({"success": False, "message": str(exc)}, status_code=500)

    return app
