# main.py
import asyncio
import logging
import sys

import uvicorn
from dotenv import load_dotenv
from pydantic import ValidationError

from .api.main import create_app
from .api.settings import get_settings
from .db.connection import Database


async def serve(settings):
    db = Database.from_settings(settings)

    # Без рабочего подключения к базе сервер не запускаем
    await db.connect()

    try:
        app = create_app(db, title=settings.PROJECT_NAME)

        # Конфигурируем и запускаем uvicorn — ASGI сервер для FastAPI
        config = uvicorn.Config(
            app=app,
            host=settings.host,
            port=settings.port,
            log_level=settings.LOG_LEVEL.lower(),
        )
        server = uvicorn.Server(config)
        logging.info(f"listening on {settings.host}:{settings.port}")
        await server.serve()
    finally:
        # Пул закрывается и при штатной остановке, и при ошибке
        await db.close()


def main():
    # Переменные окружения из .env файла
    load_dotenv()

    try:
        settings = get_settings()
    except ValidationError as e:
        logging.basicConfig(level=logging.INFO)
        logging.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logging.error(f"Server stopped: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
