"""Write-through storage of the item collection as one named JSON blob."""

import json
from typing import Any, Callable, Dict, List, Optional, Sequence

import structlog
from sqlalchemy.orm import Session, sessionmaker

from core.converters import create_id, now_ms
from core.exceptions import PersistenceReadError
from core.models import InventoryItem
from core.sanitizer import sanitize
from db.blob import StoredBlob

logger = structlog.get_logger(__name__)


class BlobStore:
    """Reads and replaces the single row holding the serialized collection."""

    def __init__(self, session_factory: sessionmaker, key: str, clock: Callable[[], int] = now_ms):
        self.session_factory = session_factory
        self.key = key
        self.clock = clock

    def read(self) -> Optional[str]:
        with self.session_factory() as session:
            blob = session.get(StoredBlob, self.key)
            return blob.value if blob is not None else None

    def save(self, records: Sequence[Dict[str, Any]]) -> None:
        """Replace the stored blob with ``records`` in one transaction."""
        value = json.dumps(list(records), ensure_ascii=False)
        with self.session_factory() as session:
            self._upsert(session, value)
            session.commit()
        logger.debug("inventory.store.saved", key=self.key, count=len(records))

    def clear(self) -> None:
        with self.session_factory() as session:
            blob = session.get(StoredBlob, self.key)
            if blob is not None:
                session.delete(blob)
                session.commit()

    def _upsert(self, session: Session, value: str) -> None:
        blob = session.get(StoredBlob, self.key)
        if blob is None:
            session.add(StoredBlob(key=self.key, value=value, updated_at=self.clock()))
        else:
            blob.value = value
            blob.updated_at = self.clock()


def decode_blob(key: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise PersistenceReadError(key, str(e)) from e


def load_items(
    store: BlobStore,
    *,
    clock: Callable[[], int] = now_ms,
    id_factory: Callable[[], str] = create_id,
) -> List[InventoryItem]:
    """Load and repair the stored collection.

    A missing blob means an empty catalog. Unreadable data is logged and
    discarded: the catalog starts empty rather than failing startup.
    """
    raw = store.read()
    if not raw:
        return []

    try:
        parsed = decode_blob(store.key, raw)
    except PersistenceReadError as e:
        logger.error("inventory.store.unreadable", key=store.key, error=e.message)
        return []

    items = sanitize(parsed, clock=clock, id_factory=id_factory)
    logger.info("inventory.store.loaded", key=store.key, count=len(items))
    return items
