from pathlib import Path

from fastapi import FastAPI

from backend.routes import router
from racegate.config import load_settings
from racegate.storage import Storage


def create_app(data_dir: Path | None = None) -> FastAPI:
    settings = load_settings()
    if data_dir is not None:
        settings.data_dir = data_dir

    app = FastAPI(title="racegate")
    app.state.settings = settings
    app.state.storage = Storage(settings.data_dir)
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses DATA_DIR env var or default)
app = create_app()
