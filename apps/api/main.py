import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api.config import Settings
from apps.api.errors import ApiError, api_error_handler
from apps.api.routers import components
from packages.storage.db import ComponentStore

logger = logging.getLogger(__name__)

def create_app(settings: Optional[Settings] = None, store: Optional[ComponentStore] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level)
    owns_store = store is None
    if store is None:
        store = ComponentStore(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            store.init_schema()
        except Exception as e:
            logger.error(f"DB init failed: {e}")
        yield
        if owns_store:
            store.dispose()

    app = FastAPI(title="Component Query Service", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ApiError, api_error_handler)
    app.include_router(components.router, prefix="/components", tags=["components"])

    @app.get("/")
    def root():
        return {"status": "ok", "message": "Component Query Service"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app

if __name__ == "__main__":
    import uvicorn
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
