import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

import config
from database import build_engine, build_sessionmaker, init_models
from errors import register_exception_handlers
import routes_allocations
import routes_auth
import routes_categories
import routes_dashboard
import routes_goals
import routes_incomes

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------------
# App setup
# ----------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models(app.state.engine)
    logger.info("Database ready")
    yield
    await app.state.engine.dispose()


def create_app(database_url: Optional[str] = None) -> FastAPI:
    config.configure_logging()
    database_url = database_url or config.DATABASE_URL

    app = FastAPI(title="Personal Budget API", lifespan=lifespan)
    app.state.database_url = database_url
    app.state.engine = build_engine(database_url)
    app.state.sessionmaker = build_sessionmaker(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(routes_auth.router)
    app.include_router(routes_incomes.router)
    app.include_router(routes_categories.router)
    app.include_router(routes_allocations.router)
    app.include_router(routes_goals.router)
    app.include_router(routes_dashboard.router)

    # ------------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------------
    @app.get("/")
    async def read_root():
        return {"message": "Personal Budget Backend is running"}

    @app.get("/health")
    async def health(request: Request):
        info = {
            "backend": "running",
            "using_sqlite": request.app.state.database_url.startswith("sqlite"),
            "database": "unavailable",
        }
        try:
            async with request.app.state.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            info["database"] = "available"
        except Exception:
            logger.exception("Health check could not reach the database")
        return info

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
