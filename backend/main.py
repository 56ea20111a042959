from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from core.config import settings
from core.logging import configure_logging
from core.persistence import BlobStore, load_items
from core.repository import InventoryRepository
from core.service import InventoryService
from db.database import create_db_and_tables, engine as default_engine
from routers.inventory import router as inventory_router

logger = structlog.get_logger(__name__)


def build_service(bind: Engine, storage_key: str) -> InventoryService:
    """Load the stored catalog and wire a write-through repository around it."""
    create_db_and_tables(bind)
    store = BlobStore(sessionmaker(bind, expire_on_commit=False), storage_key)
    repository = InventoryRepository(load_items(store), store=store)
    return InventoryService(repository)


def create_app(bind: Optional[Engine] = None, storage_key: Optional[str] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.inventory = build_service(bind or default_engine, storage_key or settings.storage_key)
        logger.info("inventory.app.started", items=len(app.state.inventory.repository))
        yield

    app = FastAPI(
        title="Stock Catalog API",
        description="API for managing a small inventory catalog",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(inventory_router, prefix="/inventory", tags=["inventory"])
    return app


configure_logging()
app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
