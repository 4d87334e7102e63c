# users_api/app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from users_api.app.api.router import api_router
from users_api.app.core.config import settings
from users_api.app.core.errors import register_exception_handlers
from users_api.app.core.logging import configure_logging
from users_api.app.db.init_db import init_models, seed_admin
from users_api.app.db.session import AsyncSessionLocal, engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings.validate_for_production()
    await init_models(engine)
    await seed_admin(AsyncSessionLocal, settings)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        lifespan=lifespan,
    )

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.BACKEND_CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["Authorization"],
        )

    register_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()

