import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from . import config
from .api.health import router as health_router
from .api.jobs import router as jobs_router
from .api.ui import UI_DIR, router as ui_router
from .db import create_db_engine, make_session_factory
from .db_init import init_schema_and_seed
from .logging_config import setup_logging
from .middleware import TracingMiddleware

logger = logging.getLogger("jobdash")


@asynccontextmanager
async def lifespan(application: FastAPI):
    # Schema must be ready before the first request is served
    try:
        seeded = init_schema_and_seed(application.state.engine)
    except Exception:
        logger.exception("Startup error: schema bootstrap failed")
        raise
    base_path = application.state.base_path
    logger.info(
        "jobdash listening on http://%s:%s%s",
        config.HOST, config.PORT,
        f" (base path: {base_path})" if base_path else "",
        extra={"seeded": seeded},
    )

    try:
        yield
    finally:
        application.state.engine.dispose()
        logger.info("jobdash shutting down")


def create_app(
    database_url: Optional[str] = None,
    base_path: Optional[str] = None,
    admin_token: Optional[str] = None,
) -> FastAPI:
    """
    Build the application with its own connection pool.

    Arguments default to the environment configuration in `jobdash.config`.
    """
    base_path = config.normalize_base_path(config.BASE_PATH if base_path is None else base_path)
    engine = create_db_engine(database_url or config.DATABASE_URL)

    application = FastAPI(title="Job Queue Dashboard", version=config.API_VERSION, lifespan=lifespan)
    application.state.engine = engine
    application.state.session_factory = make_session_factory(engine)
    application.state.base_path = base_path
    application.state.admin_token = config.ADMIN_TOKEN if admin_token is None else admin_token

    # Register routes at the root and, when configured, under the mount prefix
    prefixes = [""] + ([base_path] if base_path else [])

    exclude_paths = [prefix + path for prefix in prefixes for path in config.LOG_EXCLUDE_PATHS]
    application.add_middleware(TracingMiddleware, exclude_paths=exclude_paths)

    for prefix in prefixes:
        application.include_router(health_router, prefix=prefix, tags=["health"])
        application.include_router(jobs_router, prefix=prefix, tags=["jobs"])
        application.include_router(ui_router, prefix=prefix)

    # Static UI assets (must be after API routes); the prefixed mount goes first
    if base_path:
        application.mount(base_path, StaticFiles(directory=UI_DIR), name="ui-prefixed")
    application.mount("/", StaticFiles(directory=UI_DIR), name="ui")

    return application


def run():
    import uvicorn

    setup_logging()
    # lifespan="on" makes a failed bootstrap abort startup with a non-zero exit
    uvicorn.run(create_app(), host=config.HOST, port=config.PORT, lifespan="on", log_config=None)


if __name__ == "__main__":
    run()
