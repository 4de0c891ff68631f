"""JSON file snapshot store.

Keeps the whole POS state in a single local JSON document, the way the
browser front end kept it under one local-storage key.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from restaurant_pos.adapters.base_persistence import SnapshotStore
from restaurant_pos.models.snapshot_models import StoreSnapshot

logger = logging.getLogger(__name__)


class JsonFileSnapshotStore(SnapshotStore):
    """Snapshot store backed by a JSON file on local disk."""

    def __init__(self, path: str | Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON document (created on first save)
        """
        self.path = Path(path)

    def load(self) -> StoreSnapshot | None:
        """Read the snapshot from disk.

        Returns:
            StoreSnapshot: Parsed snapshot, or None if the file is missing or invalid
        """
        if not self.path.exists():
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return StoreSnapshot.from_storage_item(data)

        except (OSError, json.JSONDecodeError, ValidationError, AttributeError) as e:
            logger.error(f"Failed to load snapshot from {self.path}: {e}")
            return None

    def save(self, snapshot: StoreSnapshot) -> bool:
        """Write the snapshot, replacing the file atomically.

        Args:
            snapshot: State to save

        Returns:
            bool: True if written, False otherwise
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(snapshot.to_json())
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
            return True

        except OSError as e:
            logger.error(f"Failed to save snapshot to {self.path}: {e}")
            return False
