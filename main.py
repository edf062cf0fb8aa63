from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

import portfolio
from auth import router as auth_router, seed_admin
from config import Settings
from contact import contact_router
from database import Database
from errors import install_error_handlers
from logger import get_logger, init_logging
from notifier import EmailNotifier
from resources import build_routers

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    notifier: Optional[EmailNotifier] = None,
) -> FastAPI:
    """Build the API around an explicitly supplied store and notifier."""
    settings = settings or Settings.from_env()
    init_logging(settings.log_level)
    database = database or Database(settings.database_url)
    notifier = notifier or EmailNotifier.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_tables()
        seed_admin(database, settings)
        logger.info("Portfolio API started")
        yield
        database.dispose()
        logger.info("Portfolio API stopped")

    app = FastAPI(title="Portfolio API", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = database
    app.state.notifier = notifier

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    # ======
    # Routes
    # ======
    @app.get("/")
    def root():
        return {"status": "ok", "service": "portfolio-api"}

    @app.get("/api/health")
    def health():
        try:
            database_status = "connected" if database.ping() else "not-available"
        except SQLAlchemyError as e:
            logger.error(f"Health check database error: {e}")
            database_status = f"error: {str(e)[:80]}"
        return {
            "status": "ok" if database_status == "connected" else "degraded",
            "backend": "running",
            "database": database_status,
            "email": "configured" if notifier.configured else "not-configured",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    app.include_router(auth_router)
    app.include_router(portfolio.router)
    for router in build_routers():
        app.include_router(router)
    app.include_router(contact_router())

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
