"""
Seed a handful of demo items into the stored catalog.

Run locally (from backend/):
  python -m scripts.seed_inventory_demo

It uses the same DATABASE_URL / INVENTORY_STORAGE_KEY env vars as the backend
(dotenv supported by core.config). Items whose SKU already exists are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import sessionmaker

from core.config import settings
from core.exceptions import DuplicateSkuError
from core.logging import configure_logging
from core.models import ItemPayload
from core.persistence import BlobStore, load_items
from core.repository import InventoryRepository
from core.validator import ensure_valid
from db.database import create_db_and_tables, engine


@dataclass(frozen=True)
class SeedItem:
    name: str
    sku: str
    category: str
    quantity: int
    min_stock: int
    price: float


SEED_ITEMS: list[SeedItem] = [
    SeedItem(name="Claw hammer", sku="HMR-16", category="Tools", quantity=14, min_stock=5, price=18.5),
    SeedItem(name="Wood screws 4x40 (box)", sku="SCR-440", category="Hardware", quantity=3, min_stock=10, price=6.25),
    SeedItem(name="Measuring tape 5m", sku="TPE-5M", category="Tools", quantity=9, min_stock=4, price=11.0),
    SeedItem(name="Masking tape", sku="MSK-24", category="Paint", quantity=0, min_stock=6, price=2.99),
    SeedItem(name="Latex gloves (pair)", sku="GLV-L", category="Safety", quantity=40, min_stock=20, price=0.45),
]


def main() -> None:
    configure_logging()
    create_db_and_tables(engine)
    store = BlobStore(sessionmaker(engine, expire_on_commit=False), settings.storage_key)
    repository = InventoryRepository(load_items(store), store=store)

    created = 0
    skipped = 0
    for seed in SEED_ITEMS:
        payload = ensure_valid(ItemPayload.from_input(seed.__dict__))
        try:
            repository.create(payload)
            created += 1
        except DuplicateSkuError:
            skipped += 1

    print(f"[seed_inventory_demo] created={created} skipped={skipped} total={len(repository)}")


if __name__ == "__main__":
    main()
