"""
Identity-scoped cart persistence.

Keeps a LineItemStore in sync with the storage partition of whoever is
shopping. Storage is best-effort: failures are logged and the in-memory
store stays the source of truth for the session.
"""

import json
import logging
from typing import Optional

from pydantic import ValidationError

from ..core.config import Settings, settings as default_settings
from ..models.cart import CartOutcome, CartResult, LineItem
from ..models.identity import Identity
from .carts import LineItemStore
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)


class CartPersistence:
    """
    Binds a store to the active identity's storage partition.

    Usage:
        persistence = CartPersistence(storage)
        persistence.switch_identity(Identity(is_authenticated=True, user_id="u-1"))
        persistence.store.add_item(product, "M", 2)  # written to identity:cart:u-1
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        store: Optional[LineItemStore] = None,
        settings: Optional[Settings] = None,
    ):
        self.storage = storage
        self.settings = settings or default_settings
        self.identity = Identity.guest()
        self.store = store or LineItemStore(self.partition_key(self.identity))
        self.store.subscribe(self._on_store_change)
        # Set while the active partition lags behind the store after a failed write
        self._pending = False

    @property
    def storage_key(self) -> str:
        return self.store.storage_key

    def partition_key(self, identity: Identity) -> str:
        """identity:cart:<stable id> for signed-in users, else the guest key"""
        stable_id = identity.stable_id if identity.is_authenticated else None
        if not stable_id:
            return self.settings.guest_cart_key
        return f"{self.settings.cart_key_prefix}:{stable_id}"

    # ==================== Identity transitions ====================

    def switch_identity(self, identity: Identity) -> LineItemStore:
        """Flush the current partition, then load the new one in its place"""
        new_key = self.partition_key(identity)
        old_key = self.store.storage_key

        self.flush()
        self.identity = identity
        if new_key == old_key:
            # Same partition: the in-memory items are newer than anything stored
            return self.store

        if self._pending:
            logger.warning(f"Partition {old_key} could not be flushed before switching")
        items = self.load(new_key)
        self.store.replace(items, new_key)
        self._pending = False

        logger.info(f"Cart partition switched {old_key} -> {new_key} ({len(items)} items)")
        return self.store

    def logout(self) -> LineItemStore:
        """Keep the user's cart persisted and start an empty guest cart"""
        self.flush()
        self.identity = Identity.guest()
        self.store.replace([], self.partition_key(self.identity))
        self._pending = False
        return self.store

    # ==================== Storage I/O ====================

    def load(self, key: str) -> list[LineItem]:
        """Last persisted items for a partition, empty when none or unreadable"""
        try:
            raw = self.storage.get(key)
        except Exception:
            logger.exception(f"Failed to read cart partition {key}")
            return []

        if not raw:
            return []

        try:
            entries = json.loads(raw)
        except ValueError:
            entries = None

        if not isinstance(entries, list):
            logger.warning(f"Discarding unreadable cart partition {key}")
            self._remove(key)
            return []

        items = []
        for entry in entries:
            try:
                items.append(LineItem.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping invalid cart entry in {key}: {e.error_count()} errors")
        return items

    @property
    def pending(self) -> bool:
        return self._pending

    def flush(self) -> None:
        """Retry the last write if it failed, so the partition matches the store"""
        if not self._pending:
            return
        self._pending = not self._sync(self.store)

    def _sync(self, store: LineItemStore) -> bool:
        if len(store) == 0:
            return self._remove(store.storage_key)
        return self._write(store.storage_key, store.items)

    def _write(self, key: str, items: list[LineItem]) -> bool:
        payload = json.dumps([item.model_dump(mode="json", by_alias=True) for item in items])
        try:
            self.storage.set(key, payload)
        except Exception:
            logger.exception(f"Failed to persist cart partition {key}")
            return False
        return True

    def _remove(self, key: str) -> bool:
        try:
            self.storage.remove(key)
        except Exception:
            logger.exception(f"Failed to remove cart partition {key}")
            return False
        return True

    def _on_store_change(self, store: LineItemStore, result: CartResult) -> None:
        if result.outcome == CartOutcome.CLEARED:
            self._pending = not self._remove(store.storage_key)
        else:
            self._pending = not self._write(store.storage_key, store.items)
