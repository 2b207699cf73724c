import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from core.db import Database
from core.middleware import AccessLogMiddleware, CORSHeadersMiddleware
from core.responses import install_exception_handlers, ok
from core.settings import Settings, load_settings
from stars.router import router as stars_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or load_settings()
    db = database or Database(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # A failed connect aborts startup.
        await db.connect()
        try:
            yield
        finally:
            await db.close()

    app = FastAPI(title="Star Catalog API", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = db

    app.add_middleware(CORSHeadersMiddleware)
    app.add_middleware(AccessLogMiddleware)
    install_exception_handlers(app)

    app.include_router(stars_router, tags=["stars"])

    @app.get("/health")
    def health():
        return ok("Server is running")

    return app


app = create_app()


def run() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logger.info("server_starting port=%s", settings.port)
    logger.info("api_url http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
