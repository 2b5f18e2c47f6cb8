import uvicorn
from fastapi import FastAPI

from millionaire.api.routes.games import router as games_router
from millionaire.api.routes.health import router as health_router
from millionaire.api.routes.users import router as users_router
from millionaire.core.config import get_settings
from millionaire.core.logging import configure_logging


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.app_env != "dev")

    app = FastAPI(
        title="Millionaire Quiz API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(games_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "millionaire.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
